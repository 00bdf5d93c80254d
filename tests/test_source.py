"""
Menu and option file loading tests
"""

import json
import tempfile
from pathlib import Path

import pytest

from etchnav.lib.source import (
    MenuSourceError,
    menuSource_fromData,
    menuSource_load,
    menuSources_fromData,
    options_load,
)


MENU_YAML = """\
name: Main Menu
items:
  - {id: 1, title: Home, url: /}
  - {id: 2, title: About, url: /about}
  - {id: 3, title: Team, url: /about/team, parent_id: 2}
"""

MENUS = {
    "menus": [
        {"id": 3, "name": "Main Menu", "items": [{"id": 1, "title": "Home", "url": "/"}]},
        {"id": 4, "name": "Footer", "items": [{"ID": 9, "title": "Legal", "menu_item_parent": "0"}]},
    ]
}


@pytest.fixture
def workdir():
    with tempfile.TemporaryDirectory() as tmp:
        yield Path(tmp)


class TestFiles:

    def test_yaml_menu(self, workdir):
        path = workdir / "menu.yaml"
        path.write_text(MENU_YAML)

        source = menuSource_load(path)

        assert source.name == "Main Menu"
        assert [item.id for item in source.items] == [1, 2, 3]
        assert source.items[2].parent_id == 2

    def test_json_menu(self, workdir):
        path = workdir / "menu.json"
        path.write_text(json.dumps(MENUS))

        source = menuSource_load(path, menu_id=4)

        assert source.name == "Footer"
        assert source.items[0].id == 9

    def test_missing_file(self, workdir):
        with pytest.raises(MenuSourceError, match="not found"):
            menuSource_load(workdir / "nope.yaml")

    def test_bad_json(self, workdir):
        path = workdir / "menu.json"
        path.write_text("{not json")

        with pytest.raises(MenuSourceError, match="Failed to parse"):
            menuSource_load(path)

    def test_options(self, workdir):
        path = workdir / "options.yaml"
        path.write_text("mobileMenuSupport: true\nmobileBreakpoint: 900\n")

        assert options_load(path) == {"mobileMenuSupport": True, "mobileBreakpoint": 900}

    def test_options_defaults(self, workdir):
        empty = workdir / "empty.yaml"
        empty.write_text("")

        assert options_load(None) == {}
        assert options_load(empty) == {}

    def test_options_not_mapping(self, workdir):
        path = workdir / "options.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(MenuSourceError, match="mapping"):
            options_load(path)


class TestSelection:

    def test_bare_list(self):
        source = menuSource_fromData([{"id": 1, "title": "Home"}])
        assert source.name == ""
        assert len(source.items) == 1

    def test_single_of_many_needs_id(self):
        with pytest.raises(MenuSourceError, match="set menuId"):
            menuSource_fromData(MENUS)

    def test_only_menu_used(self):
        source = menuSource_fromData({"menus": MENUS["menus"][:1]})
        assert source.name == "Main Menu"

    def test_unknown_id(self):
        with pytest.raises(MenuSourceError, match="Menu 99 not found"):
            menuSource_fromData(MENUS, menu_id=99)

    @pytest.mark.parametrize("data", [None, "text", {"menus": []}])
    def test_no_menu(self, data):
        with pytest.raises(MenuSourceError, match="No menu selected"):
            menuSource_fromData(data)

    def test_items_must_be_list(self):
        with pytest.raises(MenuSourceError, match="must be a list"):
            menuSource_fromData({"name": "x", "items": {"id": 1}})


class TestAllMenus:

    def test_every_menu_in_order(self):
        sources = menuSources_fromData(MENUS)

        assert [source.name for source in sources] == ["Main Menu", "Footer"]
        assert sources[1].items[0].id == 9

    def test_single_forms(self):
        assert len(menuSources_fromData([{"id": 1, "title": "Home"}])) == 1
        assert menuSources_fromData({"name": "Main", "items": []})[0].name == "Main"

    def test_nothing_usable(self):
        assert menuSources_fromData(None) == []
        assert menuSources_fromData({"menus": ["junk"]}) == []
