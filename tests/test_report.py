"""
Code report and template lexer tests
"""

from pygments.token import Error, Keyword, Name

from etchnav.lib.lexer import EtchTemplateLexer, get_lexer
from etchnav.lib.report import report_render, style_resolve


TEMPLATE = """<li class="nav__menu-item {item.state_classes}" role="none">
  {#if item.children}
    {#loop item.children as child}<a href="{child.url}">{child.title}</a>{/loop}
  {/if}
</li>"""


class TestLexer:

    def test_block_tags(self):
        tokens = list(get_lexer().get_tokens(TEMPLATE))

        assert (Keyword, "loop") in tokens
        assert (Keyword, "if") in tokens
        assert (Name.Variable, "item.children") in tokens
        assert (Name.Tag, "li") in tokens

    def test_expression_in_attribute(self):
        tokens = list(EtchTemplateLexer().get_tokens(TEMPLATE))
        assert (Name.Variable, "{item.state_classes}") in tokens

    def test_no_error_tokens(self):
        tokens = list(EtchTemplateLexer().get_tokens(TEMPLATE))
        assert all(token_type is not Error for token_type, _ in tokens)


class TestReport:

    def test_sections(self):
        page = report_render("<nav></nav>", ".nav {}", "", "{}", "[]", title="Main <Menu>")

        assert page.startswith("<!DOCTYPE html>")
        assert "<title>Main &lt;Menu&gt;</title>" in page
        for heading in ("HTML", "CSS", "JavaScript", "ETCH JSON", "Menu JSON"):
            assert f"<h2>{heading}</h2>" in page

    def test_empty_section(self):
        page = report_render("<nav></nav>", ".nav {}", "", "{}", "[]")
        assert page.count("(not generated)") == 1

    def test_style_fallback(self):
        assert style_resolve("no-such-style") == "monokai"
        assert style_resolve("default") == "default"
