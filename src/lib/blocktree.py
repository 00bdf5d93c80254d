"""
Block tree renderer

Builds the ETCH structure-panel document: the same logical structure as
the markup renderer, expressed as typed blocks. Every loop binds the
single iterator name "item"; the editor resolves nested loops by scope.

The style map is derived from the stylesheet renderer's rule table, so the
string stylesheet and the editor's styles can never disagree. Rules are
merged per selector (base declarations first, then one @media block per
media condition), which keeps every selector unique across the map.
"""

import re
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from ..models.blocks import (
    BlockTree,
    ConditionBlock,
    ElementBlock,
    LoopBlock,
    StyleEntry,
    TextBlock,
)
from ..models.context import RenderContext
from ..models.css import CssRule
from .log import LOG
from .stylesheet import StylesheetRenderer


ITEM_ID = "item"

_CLASS_TOKEN = re.compile(r'\.(-?[A-Za-z_][A-Za-z0-9_-]*)')


def selector_owner(selector: str) -> str:
    """
    First class token of a selector, "" when it has none.

    Example:
        >>> selector_owner(".global-nav__menu-item.is-open > .global-nav__submenu")
        'global-nav__menu-item'
    """
    match = _CLASS_TOKEN.search(selector)
    return match.group(1) if match else ""


def styleKey_make(selector: str, taken: Dict[str, StyleEntry]) -> str:
    """
    Map key for a selector, unique within the map being built.

    Example:
        >>> styleKey_make(".global-nav__menu-link:hover", {})
        'global-nav-menu-link-hover'
    """
    base = re.sub(r'[^a-z0-9]+', '-', selector.lower()).strip('-') or "style"
    key = base
    suffix = 2
    while key in taken:
        key = f"{base}-{suffix}"
        suffix += 1
    return key


def flatCss_render(rules: Sequence[CssRule]) -> str:
    """
    Flat CSS body for rules sharing one selector.

    Base declarations come first, then one @media block per media
    condition in order of first appearance.
    """
    base: List[str] = []
    media_blocks: "OrderedDict[str, List[str]]" = OrderedDict()
    for rule in rules:
        if rule.media is None:
            base.extend(rule.declarations)
        else:
            media_blocks.setdefault(rule.media, []).extend(rule.declarations)

    chunks = []
    if base:
        chunks.append("\n".join(f"{declaration};" for declaration in base))
    for media, declarations in media_blocks.items():
        body = "\n".join(f"  {declaration};" for declaration in declarations)
        chunks.append(f"@media {media} {{\n{body}\n}}")
    return "\n".join(chunks)


def styleMap_build(rules: Sequence[CssRule], collection: str = "default") -> Dict[str, StyleEntry]:
    """
    Build the editor's style map from a rule table.

    Args:
        rules: Rule table in emission order
        collection: ETCH style collection of every entry

    Returns:
        Ordered key -> StyleEntry map, one entry per distinct selector
    """
    grouped: "OrderedDict[str, List[CssRule]]" = OrderedDict()
    for rule in rules:
        grouped.setdefault(rule.selector, []).append(rule)

    styles: Dict[str, StyleEntry] = {}
    for selector, selector_rules in grouped.items():
        key = styleKey_make(selector, styles)
        styles[key] = StyleEntry(
            key=key,
            selector=selector,
            css=flatCss_render(selector_rules),
            collection=collection,
        )
    LOG(f"Style map: {len(styles)} entries from {len(rules)} rules", level=3)
    return styles


def styleRefs_assign(root: ElementBlock, styles: Dict[str, StyleEntry]) -> None:
    """
    Attach style keys to the elements that own them.

    An entry belongs to every element whose first class token equals the
    first class token of the entry's selector. Entries no element owns
    (e.g. the script-built slide panels) are attached to the root.
    """
    elements: Dict[str, List[ElementBlock]] = {}
    for block in root.walk():
        if isinstance(block, ElementBlock) and block.class_first():
            elements.setdefault(block.class_first(), []).append(block)

    for key, entry in styles.items():
        owners = elements.get(selector_owner(entry.selector), [root])
        for owner in owners:
            owner.style_refs.append(key)


class BlockTreeRenderer:
    """
    Renders the typed block tree and its style map.
    """

    def __init__(self, context: RenderContext, rules: Optional[Sequence[CssRule]] = None) -> None:
        self.context = context
        self.rules = list(rules) if rules is not None else StylesheetRenderer(context).rules()

    def render(self) -> BlockTree:
        """
        Render the block tree.

        Returns:
            BlockTree whose root is the nav element; styles keyed as
            referenced by the elements' style_refs
        """
        ctx = self.context
        LOG(f"Rendering block tree (depth {ctx.desktop_depth})", level=2)

        container = self.element("Container", "div", "container")
        if ctx.mobile:
            container.children.append(self.hamburger_build())
        container.children.append(self.menu_build())

        root = self.element(ctx.component_name, "nav", "", {'aria-label': "Main navigation"})
        root.children.append(container)

        styles = styleMap_build(self.rules, ctx.style_collection)
        styleRefs_assign(root, styles)
        return BlockTree(root=root, styles=styles, rules=list(self.rules))

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------
    def element(
        self,
        label: str,
        tag: str,
        element: str,
        attributes: Optional[Dict[str, str]] = None,
        modifiers: Tuple[str, ...] = (),
        extra_classes: str = "",
    ) -> ElementBlock:
        """Element block classed under the prefix"""
        ctx = self.context
        classes = [ctx.className_make(element)]
        classes += [ctx.className_make(element, modifier) for modifier in modifiers]
        if extra_classes:
            classes.append(extra_classes)
        attrs = {'class': " ".join(classes)}
        attrs.update(attributes or {})
        return ElementBlock(label=label, tag=tag, attributes=attrs)

    def hamburger_build(self) -> ElementBlock:
        ctx = self.context
        button = self.element("Hamburger", "button", "hamburger", {
            'type': "button",
            'aria-label': "Toggle navigation menu",
            'aria-expanded': "false",
            'aria-controls': ctx.menu_id,
        })
        for index in range(1, 4):
            button.children.append(self.element(f"Line {index}", "span", "hamburger-line"))
        return button

    def menu_build(self) -> ElementBlock:
        ctx = self.context
        menu_list = self.element("Menu List", "ul", "menu-list", {
            'id': ctx.menu_id,
            'role': "menubar",
        })
        loop = LoopBlock(label="Menu Items", target=ctx.data_path, item_id=ITEM_ID)
        loop.children.append(self.item_build("Menu Item", "menu-item", "menu-link", depth=0))
        menu_list.children.append(loop)

        menu = self.element("Menu", "div", "menu")
        menu.children.append(menu_list)
        return menu

    def item_build(self, label: str, item_element: str, link_element: str, depth: int) -> ElementBlock:
        """List item with its link and, within depth, its submenu condition"""
        item = self.element(label, "li", item_element, {'role': "none"},
                            extra_classes=f"{{{ITEM_ID}.state_classes}}")
        link = self.element("Link", "a", link_element, {
            'href': f"{{{ITEM_ID}.url}}",
            'role': "menuitem",
        }, extra_classes=f"{{{ITEM_ID}.link_classes}}")
        link.children.append(TextBlock(label="Title", content=f"{{{ITEM_ID}.title}}"))
        item.children.append(link)

        if depth < self.context.desktop_depth:
            item.children.append(self.submenu_build(depth + 1))
        return item

    def submenu_build(self, level: int) -> ConditionBlock:
        ctx = self.context
        condition = ConditionBlock(label="Has Children", left=f"{ITEM_ID}.children")

        if ctx.mobile:
            toggle = self.element("Submenu Toggle", "button", "submenu-toggle", {
                'type': "button",
                'aria-label': "Toggle submenu",
                'aria-expanded': "false",
            })
            toggle.children.append(self.element("Toggle Icon", "span", "submenu-toggle-icon", {
                'aria-hidden': "true",
            }))
            condition.children.append(toggle)

        submenu = self.element(f"Submenu Level {level}", "ul", "submenu", {'role': "menu"},
                               modifiers=(f"level-{level}",))
        loop = LoopBlock(label="Submenu Items", target=f"{ITEM_ID}.children", item_id=ITEM_ID)
        loop.children.append(self.item_build("Submenu Item", "submenu-item", "submenu-link", depth=level))
        submenu.children.append(loop)
        condition.children.append(submenu)
        return condition
