"""
Shared render context

Every renderer receives the same RenderContext so the four artifacts agree
on class names, data paths and depth bounds. It is resolved once per
generation by lib.generator.context_resolve().
"""

from dataclasses import dataclass

from .options import NavOptions


@dataclass(frozen=True)
class RenderContext:
    """
    Parameters shared by all renderers.

    Attributes:
        options: The user options for this generation
        prefix: CSS class prefix (BEM block name), e.g. "global-nav"
        data_path: Template path the top-level loop binds to,
                   e.g. "options.menus.main_menu" or "props.menuItems"
        menu_slug: Snake-case menu slug
        prop_name: Component prop name (component approach)
        component_name: Label of the root block
        style_collection: ETCH style collection for generated rules
        transition_ms: CSS transition duration shared by CSS and script
        hover_intent_ms: Desktop submenu close delay
    """
    options: NavOptions
    prefix: str
    data_path: str
    menu_slug: str
    prop_name: str
    component_name: str = "Global Navigation"
    style_collection: str = "default"
    transition_ms: int = 300
    hover_intent_ms: int = 200

    @property
    def desktop_depth(self) -> int:
        return self.options.submenu_depth_desktop

    @property
    def mobile_depth(self) -> int:
        return self.options.submenu_depth_mobile

    @property
    def mobile(self) -> bool:
        return self.options.mobile_menu_support

    @property
    def breakpoint(self) -> int:
        return self.options.mobile_breakpoint

    @property
    def media_query(self) -> str:
        """Media condition of the mobile block, breakpoint used verbatim"""
        return f"(max-width: {self.breakpoint}px)"

    @property
    def menu_id(self) -> str:
        """Id of the menu list, referenced by the hamburger's aria-controls"""
        return f"{self.prefix}-menu"

    def className_make(self, element: str = "", modifier: str = "") -> str:
        """
        Build a BEM class name under the prefix.

        Example:
            >>> context.className_make("menu-link")
            'global-nav__menu-link'
            >>> context.className_make("submenu", "level-2")
            'global-nav__submenu--level-2'
        """
        name = self.prefix
        if element:
            name += f"__{element}"
        if modifier:
            name += f"--{modifier}"
        return name

    def selector_make(self, element: str = "", modifier: str = "") -> str:
        """Class selector for className_make()"""
        return "." + self.className_make(element, modifier)
