"""
Stylesheet renderer

Builds the navigation stylesheet as one ordered table of flat CssRule
entries, then serialises it. Two consumers read the table:

- render() writes the nested-shorthand stylesheet (rules under the root
  selector become "&__menu", "&__menu-link:hover", ...), with a single
  @media (max-width: Npx) block for the mobile rules
- lib.blocktree.styleMap_build() writes the editor's per-selector map

Sections, each gated independently:
    tokens + base layout, links, current-page colours      always
    hamburger icon + one open-state animation               mobile support
    desktop submenu flyouts, cascade-left escape hatch      desktop depth > 0
    mobile block (position x submenu behaviour x depth)     mobile support

The table is a pure function of the render context.
"""

from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..models.context import RenderContext
from ..models.css import CssRule
from .log import LOG


Declarations = Tuple[str, ...]

# Hamburger open-state transforms for lines 1, 2 and 3.
#
# Geometry: the icon is 2rem tall and holds three 3px lines separated by a
# 5px flex gap, so line centres sit 8px apart. translateY(+-8px) moves the
# outer lines onto the middle one.
HAMBURGER_ANIMATIONS: Dict[str, Tuple[Declarations, Declarations, Declarations]] = {
    'spin': (
        ("transform: translateY(8px) rotate(225deg)",),
        ("opacity: 0", "transform: scaleX(0)"),
        ("transform: translateY(-8px) rotate(-225deg)",),
    ),
    'squeeze': (
        ("transform: translateY(8px) rotate(45deg)",),
        ("opacity: 0", "transform: scaleX(0)"),
        ("transform: translateY(-8px) rotate(-45deg)",),
    ),
    'collapse': (
        ("transform: translateY(8px) rotate(-45deg)",),
        ("opacity: 0",),
        ("transform: translateY(-8px) rotate(45deg)",),
    ),
    'arrow': (
        ("transform: translateX(-4px) rotate(-45deg) scaleX(0.55)",),
        ("transform: translateX(0)",),
        ("transform: translateX(-4px) rotate(45deg) scaleX(0.55)",),
    ),
}
DEFAULT_ANIMATION = 'spin'

NESTED_INDENT = "  "


def hamburgerAnimation_get(name: str) -> Tuple[Declarations, Declarations, Declarations]:
    """Animation declarations by name, falling back to spin"""
    return HAMBURGER_ANIMATIONS.get(name, HAMBURGER_ANIMATIONS[DEFAULT_ANIMATION])


class StylesheetRenderer:
    """
    Renders the navigation stylesheet for one render context.
    """

    def __init__(self, context: RenderContext) -> None:
        self.context = context

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def rules(self) -> List[CssRule]:
        """
        Build the full rule table.

        Returns:
            Rules in emission order; base rules first, media rules last
        """
        ctx = self.context
        rules: List[CssRule] = []
        rules += self.base_rules()
        if ctx.mobile:
            rules += self.hamburger_rules()
        if ctx.desktop_depth > 0:
            rules += self.submenu_rules()
        if ctx.mobile:
            rules += self.mobile_rules()
        LOG(f"Built {len(rules)} CSS rules", level=3)
        return rules

    def render(self) -> str:
        """
        Render the nested-shorthand stylesheet.

        Returns:
            CSS string; contains an @media block only with mobile support
        """
        LOG("Rendering stylesheet", level=2)
        return stylesheet_serialize(self.rules(), self.context.selector_make())

    # ------------------------------------------------------------------
    # Base layout
    # ------------------------------------------------------------------
    def tokens_declarations(self) -> Declarations:
        """Custom properties shared by every rule"""
        return (
            "--nav-text: #2c3338",
            "--nav-accent: #0073aa",
            "--nav-surface: #ffffff",
            "--nav-muted: #f0f0f1",
            "--nav-highlight: #e5f5fa",
            "--nav-shadow: 0 4px 12px rgba(0, 0, 0, 0.15)",
            f"--nav-transition: {self.context.transition_ms}ms ease",
            "--nav-gap: 2rem",
        )

    def base_rules(self) -> List[CssRule]:
        s = self.context.selector_make
        rules = [
            CssRule(s(), self.tokens_declarations() + ("position: relative",)),
            CssRule(s("container"), (
                "max-width: 1200px",
                "margin: 0 auto",
                "padding: 1rem 1.25rem",
                "display: flex",
                "align-items: center",
                "justify-content: space-between",
            )),
            CssRule(s("menu"), (
                "display: flex",
                "align-items: center",
            )),
            CssRule(s("menu-list"), (
                "display: flex",
                "list-style: none",
                "margin: 0",
                "padding: 0",
                "gap: var(--nav-gap)",
            )),
            CssRule(s("menu-item"), (
                "position: relative",
            )),
            CssRule(s("menu-link"), (
                "display: block",
                "padding: 0.5rem 0",
                "color: var(--nav-text)",
                "font-weight: 500",
                "font-size: 1rem",
                "text-decoration: none",
                "transition: color 0.2s ease",
            )),
            CssRule(f"{s('menu-link')}:hover, {s('menu-link')}:focus", (
                "color: var(--nav-accent)",
            )),
            CssRule(f"{s('menu-link')}.current-page", (
                "color: var(--nav-accent)",
                "font-weight: 600",
            )),
            CssRule(f"{s('menu-item')}.is-current-parent > {s('menu-link')}", (
                "color: var(--nav-accent)",
            )),
        ]
        return rules

    # ------------------------------------------------------------------
    # Hamburger
    # ------------------------------------------------------------------
    def hamburger_rules(self) -> List[CssRule]:
        s = self.context.selector_make
        rules = [
            CssRule(s("hamburger"), (
                "display: none",
                "flex-direction: column",
                "justify-content: center",
                "align-items: center",
                "gap: 5px",
                "width: 2rem",
                "height: 2rem",
                "padding: 0",
                "background: transparent",
                "border: none",
                "cursor: pointer",
                "z-index: 10",
            )),
            CssRule(f"{s('hamburger')}:focus-visible", (
                "outline: 2px solid var(--nav-accent)",
                "outline-offset: 4px",
            )),
            CssRule(s("hamburger-line"), (
                "display: block",
                "width: 2rem",
                "height: 3px",
                "background-color: var(--nav-text)",
                "border-radius: 3px",
                "transition: all 0.4s ease",
                "transform-origin: center center",
            )),
        ]

        animation = hamburgerAnimation_get(self.context.options.hamburger_animation)
        for index, declarations in enumerate(animation, start=1):
            rules.append(CssRule(
                f"{s('hamburger')}.is-active {s('hamburger-line')}:nth-child({index})",
                declarations,
            ))
        return rules

    # ------------------------------------------------------------------
    # Desktop submenus
    # ------------------------------------------------------------------
    def submenu_rules(self) -> List[CssRule]:
        ctx = self.context
        s = ctx.selector_make

        # With the behaviour script present, hover intent drives .is-open;
        # without it, plain :hover reveals.
        trigger = ".is-open" if ctx.mobile else ".has-submenu:hover"
        reveal = ", ".join([
            f"{s('menu-item')}{trigger} > {s('submenu')}",
            f"{s('menu-item')}:focus-within > {s('submenu')}",
        ])

        rules = [
            CssRule(s("submenu"), (
                "position: absolute",
                "top: 100%",
                "left: 0",
                "z-index: 100",
                "min-width: 200px",
                "margin: 0",
                "padding: 0.5rem 0",
                "list-style: none",
                "background: var(--nav-surface)",
                "border-radius: 4px",
                "box-shadow: var(--nav-shadow)",
                "opacity: 0",
                "visibility: hidden",
                "transform: translateY(-10px)",
                "transition: opacity 0.2s ease, transform 0.2s ease, visibility 0.2s",
            )),
            CssRule(reveal, (
                "opacity: 1",
                "visibility: visible",
                "transform: translateY(0)",
            )),
            CssRule(f"{s('submenu')}.cascade-left", (
                "left: auto",
                "right: 0",
            )),
            CssRule(s("submenu-item"), (
                "position: relative",
                "margin: 0",
            )),
            CssRule(s("submenu-link"), (
                "display: block",
                "padding: 0.75rem 1.25rem",
                "color: var(--nav-text)",
                "font-size: 0.9375rem",
                "text-decoration: none",
                "transition: background-color 0.2s ease",
            )),
            CssRule(f"{s('submenu-link')}:hover, {s('submenu-link')}:focus", (
                "background-color: var(--nav-muted)",
                "color: var(--nav-accent)",
            )),
            CssRule(f"{s('submenu-link')}.current-page", (
                "background-color: var(--nav-highlight)",
                "color: var(--nav-accent)",
                "font-weight: 500",
            )),
            CssRule(f"{s('submenu-item')}.is-current-parent > {s('submenu-link')}", (
                "color: var(--nav-accent)",
            )),
        ]

        if ctx.desktop_depth > 1:
            nested_trigger = ".is-open" if ctx.mobile else ".has-submenu:hover"
            rules += [
                CssRule(f"{s('submenu-item')} > {s('submenu')}", (
                    "top: 0",
                    "left: 100%",
                    "transform: translateX(-10px)",
                )),
                CssRule(", ".join([
                    f"{s('submenu-item')}{nested_trigger} > {s('submenu')}",
                    f"{s('submenu-item')}:focus-within > {s('submenu')}",
                ]), (
                    "opacity: 1",
                    "visibility: visible",
                    "transform: translateX(0)",
                )),
                CssRule(f"{s('submenu-item')} > {s('submenu')}.cascade-left", (
                    "left: auto",
                    "right: 100%",
                )),
            ]

        if ctx.mobile:
            rules += self.submenuToggle_rules()
        return rules

    def submenuToggle_rules(self) -> List[CssRule]:
        """Mobile submenu toggle; hidden on desktop"""
        s = self.context.selector_make
        open_items = ", ".join([
            f"{s('menu-item')}.is-open > {s('submenu-toggle')} {s('submenu-toggle-icon')}",
            f"{s('submenu-item')}.is-open > {s('submenu-toggle')} {s('submenu-toggle-icon')}",
        ])
        return [
            CssRule(s("submenu-toggle"), (
                "display: none",
                "align-items: center",
                "justify-content: center",
                "width: 2.5rem",
                "height: 2.5rem",
                "padding: 0",
                "color: inherit",
                "background: transparent",
                "border: none",
                "cursor: pointer",
            )),
            CssRule(s("submenu-toggle-icon"), (
                "display: block",
                "width: 0.5rem",
                "height: 0.5rem",
                "border-right: 2px solid currentColor",
                "border-bottom: 2px solid currentColor",
                "transform: rotate(45deg)",
                "transition: transform var(--nav-transition)",
            )),
            CssRule(open_items, (
                "transform: rotate(-135deg)",
            )),
        ]

    # ------------------------------------------------------------------
    # Mobile block
    # ------------------------------------------------------------------
    def mobile_rules(self) -> List[CssRule]:
        """
        Everything inside the single mobile media query.

        The panel layout comes from the menu position; submenu rules from
        the submenu behaviour, limited by the mobile depth.
        """
        ctx = self.context
        s = ctx.selector_make

        positions: Dict[str, Callable[[], List[CssRule]]] = {
            'left': lambda: self.panelSide_rules('left'),
            'right': lambda: self.panelSide_rules('right'),
            'top': self.panelTop_rules,
            'full': self.panelFull_rules,
        }
        position_rules = positions.get(ctx.options.menu_position, positions['left'])

        rules = [CssRule(s("hamburger"), ("display: flex",))]
        rules += position_rules()

        if ctx.desktop_depth > 0:
            behaviors: Dict[str, Callable[[], List[CssRule]]] = {
                'accordion': self.accordion_rules,
                'slide': self.slide_rules,
                'clickable': self.clickable_rules,
                'always': self.always_rules,
            }
            behavior_rules = behaviors.get(ctx.options.submenu_behavior, behaviors['accordion'])
            rules += behavior_rules()
            if ctx.options.submenu_behavior != 'clickable':
                rules += self.mobileDepth_rules()

        return [CssRule(rule.selector, rule.declarations, ctx.media_query) for rule in rules]

    def panelList_rules(self, gap: str = "0", link: Sequence[str] = ()) -> List[CssRule]:
        s = self.context.selector_make
        link_declarations = tuple(link) or (
            "padding: 1rem 0",
            "border-bottom: 1px solid var(--nav-muted)",
        )
        return [
            CssRule(s("menu-list"), (
                "flex-direction: column",
                f"gap: {gap}",
            )),
            CssRule(s("menu-link"), link_declarations),
        ]

    def panelSide_rules(self, side: str) -> List[CssRule]:
        """Fixed off-screen panel sliding in from the left or right edge"""
        s = self.context.selector_make
        offset = "-100%" if side == 'left' else "100%"
        shadow_x = "2px" if side == 'left' else "-2px"
        rules = [
            CssRule(s("menu"), (
                "position: fixed",
                "top: 0",
                f"{side}: 0",
                "z-index: 9",
                "display: block",
                "width: 300px",
                "max-width: 85vw",
                "height: 100vh",
                "padding: 4rem 2rem",
                "overflow-y: auto",
                "background: var(--nav-surface)",
                f"box-shadow: {shadow_x} 0 8px rgba(0, 0, 0, 0.1)",
                f"transform: translateX({offset})",
                "transition: transform var(--nav-transition)",
            )),
            CssRule(f"{s('menu')}.is-open", (
                "transform: translateX(0)",
            )),
        ]
        return rules + self.panelList_rules()

    def panelTop_rules(self) -> List[CssRule]:
        """Dropdown panel below the header bar"""
        s = self.context.selector_make
        rules = [
            CssRule(s("menu"), (
                "position: fixed",
                "top: 60px",
                "left: 0",
                "right: 0",
                "z-index: 9",
                "display: block",
                "max-height: 0",
                "padding: 0 2rem",
                "overflow: hidden",
                "background: var(--nav-surface)",
                "box-shadow: 0 4px 8px rgba(0, 0, 0, 0.1)",
                "transition: max-height var(--nav-transition), padding var(--nav-transition)",
            )),
            CssRule(f"{s('menu')}.is-open", (
                "max-height: calc(100vh - 60px)",
                "padding: 2rem",
                "overflow-y: auto",
            )),
        ]
        return rules + self.panelList_rules()

    def panelFull_rules(self) -> List[CssRule]:
        """Centred fullscreen overlay"""
        s = self.context.selector_make
        rules = [
            CssRule(s("menu"), (
                "position: fixed",
                "inset: 0",
                "z-index: 9",
                "display: flex",
                "align-items: center",
                "justify-content: center",
                "padding: 4rem 2rem",
                "overflow-y: auto",
                "background: var(--nav-surface)",
                "opacity: 0",
                "visibility: hidden",
                "transition: opacity var(--nav-transition), visibility var(--nav-transition)",
            )),
            CssRule(f"{s('menu')}.is-open", (
                "opacity: 1",
                "visibility: visible",
            )),
            CssRule(s("menu-list"), (
                "text-align: center",
            )),
        ]
        return rules + self.panelList_rules(gap="2rem", link=(
            "font-size: 1.5rem",
            "padding: 1rem 0",
        ))

    def itemRow_rules(self) -> List[CssRule]:
        """Items lay out link and toggle on one row, submenu below"""
        s = self.context.selector_make
        return [
            CssRule(f"{s('menu-item')}, {s('submenu-item')}", (
                "display: flex",
                "flex-wrap: wrap",
                "align-items: center",
            )),
            CssRule(f"{s('menu-link')}, {s('submenu-link')}", (
                "flex: 1",
            )),
            CssRule(s("submenu-toggle"), (
                "display: inline-flex",
            )),
        ]

    def staticSubmenu_declarations(self) -> Declarations:
        """Reset the desktop flyout to an in-flow list"""
        return (
            "position: static",
            "width: 100%",
            "min-width: 0",
            "margin: 0",
            "padding: 0 0 0 1rem",
            "opacity: 1",
            "visibility: visible",
            "transform: none",
            "box-shadow: none",
            "border-radius: 0",
        )

    def accordion_rules(self) -> List[CssRule]:
        """Collapsible submenus; the script animates max-height"""
        s = self.context.selector_make
        return self.itemRow_rules() + [
            CssRule(s("submenu"), self.staticSubmenu_declarations() + (
                "max-height: 0",
                "overflow: hidden",
                "background: var(--nav-muted)",
                "transition: max-height var(--nav-transition)",
            )),
            CssRule(f"{s('menu-item')}.is-open > {s('submenu')}, {s('submenu-item')}.is-open > {s('submenu')}", (
                "max-height: 500px",
            )),
            CssRule(s("submenu-link"), (
                "padding: 0.75rem 1rem",
            )),
        ]

    def slide_rules(self) -> List[CssRule]:
        """
        Sliding panel layer.

        The script clones the list into .__panels once the viewport is
        mobile and marks the menu .has-panels, which hides the base list.
        """
        s = self.context.selector_make
        return [
            CssRule(f"{s('menu')}.has-panels {s('menu-list')}", (
                "display: none",
            )),
            CssRule(s("panels"), (
                "position: relative",
                "width: 100%",
                "height: 100%",
                "overflow: hidden",
            )),
            CssRule(s("panel"), (
                "position: absolute",
                "inset: 0",
                "overflow-y: auto",
                "background: var(--nav-surface)",
                "visibility: hidden",
                "transform: translateX(100%)",
                "transition: transform var(--nav-transition), visibility var(--nav-transition)",
            )),
            CssRule(f"{s('panel')}.is-active", (
                "visibility: visible",
                "transform: translateX(0)",
            )),
            CssRule(f"{s('panel')}.is-previous", (
                "transform: translateX(-100%)",
            )),
            CssRule(s("panel-header"), (
                "display: flex",
                "align-items: center",
                "gap: 0.5rem",
                "padding-bottom: 1rem",
                "border-bottom: 1px solid var(--nav-muted)",
            )),
            CssRule(s("panel-back"), (
                "padding: 0.5rem 0",
                "color: var(--nav-accent)",
                "font: inherit",
                "background: transparent",
                "border: none",
                "cursor: pointer",
            )),
            CssRule(s("panel-title"), (
                "font-weight: 600",
            )),
            CssRule(s("panel-list"), (
                "margin: 0",
                "padding: 0",
                "list-style: none",
            )),
            CssRule(f"{s('panel-list')} {s('submenu')}", (
                "display: none",
            )),
            CssRule(f"{s('panel-list')} {s('menu-item')}, {s('panel-list')} {s('submenu-item')}", (
                "display: flex",
                "align-items: center",
            )),
            CssRule(f"{s('panel-list')} {s('menu-link')}, {s('panel-list')} {s('submenu-link')}", (
                "flex: 1",
                "padding: 1rem 0",
                "border-bottom: 1px solid var(--nav-muted)",
            )),
            CssRule(f"{s('panel-list')} {s('submenu-toggle')}", (
                "display: inline-flex",
            )),
            CssRule(f"{s('panel-list')} {s('submenu-toggle-icon')}", (
                "transform: rotate(-45deg)",
            )),
        ]

    def clickable_rules(self) -> List[CssRule]:
        """Submenus hidden; top-level links navigate directly"""
        s = self.context.selector_make
        return [
            CssRule(s("submenu"), ("display: none",)),
            CssRule(s("submenu-toggle"), ("display: none",)),
        ]

    def always_rules(self) -> List[CssRule]:
        """Submenus permanently expanded"""
        s = self.context.selector_make
        return [
            CssRule(s("submenu"), self.staticSubmenu_declarations() + (
                "max-height: none",
                "background: transparent",
            )),
            CssRule(s("submenu-toggle"), ("display: none",)),
            CssRule(s("submenu-link"), (
                "padding: 0.75rem 0",
            )),
        ]

    def mobileDepth_rules(self) -> List[CssRule]:
        """Hide submenu levels deeper than the mobile depth"""
        ctx = self.context
        s = ctx.selector_make
        depth = ctx.mobile_depth
        if depth >= ctx.desktop_depth:
            return []
        if depth <= 0:
            return [CssRule(f"{s('submenu')}, {s('submenu-toggle')}", ("display: none",))]
        return [
            CssRule(s("submenu", f"level-{depth + 1}"), ("display: none",)),
            CssRule(f"{s('submenu', f'level-{depth}')} {s('submenu-toggle')}", ("display: none",)),
        ]


# ----------------------------------------------------------------------
# Serialisation
# ----------------------------------------------------------------------
def selector_nest(selector: str, root: str) -> Optional[str]:
    """
    Rewrite a flat selector relative to the root selector.

    Returns None when the selector does not start with the root class.

    Example:
        >>> selector_nest(".global-nav__menu-link:hover", ".global-nav")
        '&__menu-link:hover'
        >>> selector_nest(".global-navigation", ".global-nav") is None
        True
    """
    if not selector.startswith(root):
        return None
    rest = selector[len(root):]
    if rest and (rest[0].isalnum()):
        return None
    return "&" + rest


def rules_group(rules: Sequence[CssRule], root: str, indent: str = "") -> str:
    """
    Render rules sharing one media context.

    Rules under the root become nested blocks inside one root block;
    anything else is written flat after it.
    """
    root_declarations: List[str] = []
    nested: List[str] = []
    flat: List[str] = []

    inner = indent + NESTED_INDENT
    for rule in rules:
        if rule.selector == root:
            root_declarations.extend(rule.declarations)
            continue

        parts = [selector_nest(part, root) for part in rule.selectors_split()]
        if all(part is not None for part in parts):
            selector_lines = f",\n{inner}".join(parts)  # type: ignore[arg-type]
            nested.append(
                f"{inner}{selector_lines} {{\n"
                f"{rule.body_render(inner + NESTED_INDENT)}\n"
                f"{inner}}}"
            )
        else:
            flat.append(
                f"{indent}{rule.selector} {{\n"
                f"{rule.body_render(indent + NESTED_INDENT)}\n"
                f"{indent}}}"
            )

    sections: List[str] = []
    if root_declarations:
        sections.append("\n".join(f"{inner}{declaration};" for declaration in root_declarations))
    sections.extend(nested)

    chunks = []
    if sections:
        chunks.append(f"{indent}{root} {{\n" + "\n\n".join(sections) + f"\n{indent}}}")
    chunks.extend(flat)
    return "\n\n".join(chunks)


def stylesheet_serialize(rules: Sequence[CssRule], root: str) -> str:
    """
    Serialise a rule table to nested-shorthand CSS.

    Base rules come first; each distinct media condition follows as one
    @media block, in order of first appearance.
    """
    base = [rule for rule in rules if rule.media is None]
    medias: List[str] = []
    for rule in rules:
        if rule.media is not None and rule.media not in medias:
            medias.append(rule.media)

    chunks = []
    if base:
        chunks.append(rules_group(base, root))
    for media in medias:
        grouped = [rule for rule in rules if rule.media == media]
        chunks.append(f"@media {media} {{\n{rules_group(grouped, root, NESTED_INDENT)}\n}}")
    return "\n\n".join(chunks)
