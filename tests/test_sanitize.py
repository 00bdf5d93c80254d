"""
Identifier sanitiser tests

Snake-case slugs, kebab-case class prefixes and prop names.
"""

import pytest

from etchnav.lib.sanitize import identifier_toKebab, identifier_toProp, identifier_toSnake


class TestSnake:
    """Data-path slugs"""

    def test_menu_name(self):
        assert identifier_toSnake("Main Menu") == "main_menu"

    def test_hyphens_and_runs_collapse(self):
        """Spaces and hyphens become underscores, runs collapse to one"""
        assert identifier_toSnake("Main Menu - Footer") == "main_menu_footer"

    def test_edges_trimmed(self):
        assert identifier_toSnake("__Top  Nav__") == "top_nav"

    def test_invalid_input_is_empty(self):
        assert identifier_toSnake("!!! ???") == ""
        assert identifier_toSnake("") == ""
        assert identifier_toSnake(None) == ""

    @pytest.mark.parametrize("text", ["Main Menu", "a--b__c", "Ünïcode Menü", "  x  "])
    def test_idempotent(self, text):
        once = identifier_toSnake(text)
        assert identifier_toSnake(once) == once


class TestKebab:
    """CSS class prefixes"""

    def test_menu_name(self):
        assert identifier_toKebab("Global Navigation") == "global-navigation"

    def test_underscores_and_punctuation(self):
        assert identifier_toKebab("Main_Menu  (Top)") == "main-menu-top"

    def test_edges_trimmed(self):
        assert identifier_toKebab("--site-nav--") == "site-nav"

    def test_invalid_input_is_empty(self):
        assert identifier_toKebab("***") == ""

    @pytest.mark.parametrize("text", ["Main Menu", "a--b__c", "  x  "])
    def test_idempotent(self, text):
        once = identifier_toKebab(text)
        assert identifier_toKebab(once) == once


class TestProp:
    """Component prop names keep their case"""

    def test_camel_case_preserved(self):
        assert identifier_toProp("menuItems") == "menuItems"

    def test_strips_invalid(self):
        assert identifier_toProp("menu-Items 2") == "menuItems2"

    def test_underscore_kept(self):
        assert identifier_toProp("nav_items!") == "nav_items"

    def test_empty(self):
        assert identifier_toProp("") == ""
        assert identifier_toProp("-- --") == ""
