"""
Block tree renderer tests

Typed block structure, serialisation hints and the style map.
"""

import pytest

from etchnav.lib.blocktree import (
    BlockTreeRenderer,
    flatCss_render,
    selector_owner,
    styleMap_build,
)
from etchnav.lib.generator import context_resolve
from etchnav.models.blocks import ConditionBlock, ElementBlock, LoopBlock, TextBlock, separators_make
from etchnav.models.css import CssRule
from etchnav.models.menu import MenuSource
from etchnav.models.options import NavOptions


def tree_render(**options):
    context = context_resolve(NavOptions.model_validate(options), MenuSource(name="Nav"))
    return BlockTreeRenderer(context).render()


def blocks_of(tree, kind):
    return [block for block in tree.root.walk() if isinstance(block, kind)]


class TestStructure:

    def test_root(self):
        data = tree_render().root.to_dict()

        assert data["blockName"] == "etch/element"
        assert data["attrs"]["tag"] == "nav"
        assert data["attrs"]["metadata"] == {"name": "Global Navigation"}
        assert data["attrs"]["attributes"]["class"] == "nav"

    @pytest.mark.parametrize("depth", [0, 1, 2, 5])
    def test_depth_bound(self, depth):
        tree = tree_render(submenuDepthDesktop=depth)

        assert len(blocks_of(tree, LoopBlock)) == depth + 1
        assert len(blocks_of(tree, ConditionBlock)) == depth

    def test_single_iterator_name(self):
        tree = tree_render(submenuDepthDesktop=4)
        loops = blocks_of(tree, LoopBlock)

        assert {loop.item_id for loop in loops} == {"item"}
        assert loops[0].target == "options.menus.nav"
        assert all(loop.target == "item.children" for loop in loops[1:])

    def test_component_target(self):
        tree = tree_render(approach="component", componentPropName="links")
        assert blocks_of(tree, LoopBlock)[0].target == "props.links"

    def test_condition_attrs(self):
        condition = blocks_of(tree_render(), ConditionBlock)[0].to_dict()

        assert condition["blockName"] == "etch/condition"
        assert condition["attrs"]["condition"] == {
            "leftHand": "item.children",
            "operator": "isTruthy",
            "rightHand": None,
        }
        assert condition["attrs"]["conditionString"] == "item.children"

    def test_text_blocks(self):
        texts = blocks_of(tree_render(), TextBlock)
        assert [text.content for text in texts] == ["{item.title}", "{item.title}"]

    def test_mobile_elements(self):
        without = {block.class_first() for block in blocks_of(tree_render(), ElementBlock)}
        with_mobile = {block.class_first() for block in blocks_of(tree_render(mobileMenuSupport=True), ElementBlock)}

        assert "nav__hamburger" not in without
        assert "nav__submenu-toggle" not in without
        assert {"nav__hamburger", "nav__hamburger-line", "nav__submenu-toggle"} <= with_mobile

    def test_submenu_level_modifier(self):
        submenus = [b for b in blocks_of(tree_render(submenuDepthDesktop=2), ElementBlock)
                    if b.class_first() == "nav__submenu"]

        assert [b.attributes["class"] for b in submenus] == [
            "nav__submenu nav__submenu--level-1",
            "nav__submenu nav__submenu--level-2",
        ]


class TestSeparators:
    """innerHTML / innerContent derived from child count"""

    def test_no_children(self):
        assert separators_make(0) == ("\n\n", ["\n\n"])

    def test_children(self):
        assert separators_make(1) == ("\n\n", ["\n", None, "\n"])
        assert separators_make(2) == ("\n\n\n\n", ["\n", None, "\n\n", None, "\n"])

    def test_serialised(self):
        data = tree_render().root.to_dict()
        container = data["innerBlocks"][0]

        assert data["innerContent"] == ["\n", None, "\n"]
        assert len(container["innerContent"]) == 3
        link_text = blocks_of(tree_render(), TextBlock)[0].to_dict()
        assert link_text["innerHTML"] == "\n\n"


class TestStyleMap:

    @pytest.mark.parametrize("options", [
        {},
        {"mobileMenuSupport": True},
        {"mobileMenuSupport": True, "submenuBehavior": "slide", "submenuDepthDesktop": 3},
        {"mobileMenuSupport": True, "submenuBehavior": "clickable", "menuPosition": "full"},
        {"mobileMenuSupport": True, "submenuDepthDesktop": 3, "submenuDepthMobile": 0},
        {"submenuDepthDesktop": 0},
    ])
    def test_selectors_unique(self, options):
        styles = tree_render(**options).styles
        selectors = [entry.selector for entry in styles.values()]

        assert len(selectors) == len(set(selectors))
        assert all(key == entry.key for key, entry in styles.items())

    def test_references_resolve(self):
        tree = tree_render(mobileMenuSupport=True, submenuBehavior="slide", submenuDepthDesktop=2)
        referenced = set()
        for block in blocks_of(tree, ElementBlock):
            referenced.update(block.style_refs)

        assert referenced == set(tree.styles)

    def test_owner_assignment(self):
        tree = tree_render()
        links = [b for b in blocks_of(tree, ElementBlock) if b.class_first() == "nav__menu-link"]
        key = next(k for k, e in tree.styles.items() if e.selector == ".nav__menu-link")

        assert key in links[0].style_refs

    def test_unowned_entries_on_root(self):
        tree = tree_render(mobileMenuSupport=True, submenuBehavior="slide")
        key = next(k for k, e in tree.styles.items() if e.selector == ".nav__panel")

        assert key in tree.root.style_refs

    def test_media_merged_after_base(self):
        tree = tree_render(mobileMenuSupport=True)
        entry = next(e for e in tree.styles.values() if e.selector == ".nav__hamburger")

        assert entry.css.startswith("display: none;\n")
        assert entry.css.endswith("@media (max-width: 1200px) {\n  display: flex;\n}")

    def test_entry_dict(self):
        entry = next(iter(tree_render().styles_toDict().values()))

        assert entry == {
            "type": "class",
            "selector": ".nav",
            "collection": "default",
            "css": entry["css"],
            "readonly": False,
        }

    def test_colliding_keys_suffixed(self):
        styles = styleMap_build([
            CssRule(".a-b", ("color: red",)),
            CssRule(".a_b", ("color: blue",)),
            CssRule(".a-b", ("margin: 0",)),
        ])

        assert list(styles) == ["a-b", "a-b-2"]
        assert styles["a-b"].css == "color: red;\nmargin: 0;"

    def test_flat_css(self):
        css = flatCss_render([
            CssRule(".x", ("a: 1",), "(max-width: 10px)"),
            CssRule(".x", ("b: 2",)),
        ])
        assert css == "b: 2;\n@media (max-width: 10px) {\n  a: 1;\n}"

    def test_selector_owner(self):
        assert selector_owner(".nav__menu-item.is-open > .nav__submenu") == "nav__menu-item"
        assert selector_owner("body") == ""
