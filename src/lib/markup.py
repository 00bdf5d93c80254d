"""
Markup renderer

Emits the navigation as a template for ETCH's loop/condition syntax:

    {#loop options.menus.main_menu as item}
      ...
      {#if item.children}
        {#loop item.children as child} ... {/loop}
      {/if}
    {/loop}

The template is rendered from the shape of the options only (never from
menu data), nested to submenu_depth_desktop levels. Each level binds its
own iterator name from a positional table so nested loops never shadow
each other and stay readable.

Item classes use the pre-computed state fields of the menu data:
{item.state_classes} on list items and {item.link_classes} on links.
"""

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..models.context import RenderContext
from .log import LOG


DEPTH_VAR_NAMES: Tuple[str, ...] = (
    "item",
    "child",
    "subchild",
    "subsubchild",
    "level4child",
    "level5child",
)

INDENT_STEP = "  "


def depthVar_name(depth: int, names: Sequence[str] = DEPTH_VAR_NAMES) -> str:
    """
    Iterator variable for a nesting depth (0 = top-level loop).

    Example:
        >>> depthVar_name(2)
        'subchild'
        >>> depthVar_name(7)
        'level7child'
    """
    if 0 <= depth < len(names):
        return names[depth]
    return f"level{depth}child"


@dataclass(frozen=True)
class MarkupLevel:
    """
    Recursion accumulator for one submenu level.

    Attributes:
        depth: Submenu level being rendered (1 = first submenu)
        max_depth: Deepest submenu level to render
        var_name: Iterator variable of the enclosing loop
        indent: Indentation of the level's {#if} line
    """
    depth: int
    max_depth: int
    var_name: str
    indent: str

    def descend(self, var_name: str) -> "MarkupLevel":
        return MarkupLevel(
            depth=self.depth + 1,
            max_depth=self.max_depth,
            var_name=var_name,
            indent=self.indent + INDENT_STEP * 4,
        )


class MarkupRenderer:
    """
    Renders the navigation template string.

    Output is deterministic for a given (approach, prefix, desktop depth,
    mobile support, data path).
    """

    def __init__(self, context: RenderContext, var_names: Sequence[str] = DEPTH_VAR_NAMES) -> None:
        self.context = context
        self.var_names = var_names

    def render(self) -> str:
        """
        Render the complete template.

        Returns:
            Template HTML string
        """
        ctx = self.context
        LOG(f"Rendering markup (depth {ctx.desktop_depth}, loop {ctx.data_path})", level=2)

        lines: List[str] = [
            f'<nav class="{ctx.className_make()}" aria-label="Main navigation">',
            f'  <div class="{ctx.className_make("container")}">',
        ]

        if ctx.mobile:
            lines.extend(self.hamburger_render("    "))
            lines.append("")

        item_var = depthVar_name(0, self.var_names)
        lines.extend([
            f'    <div class="{ctx.className_make("menu")}">',
            f'      <ul class="{ctx.className_make("menu-list")}" id="{ctx.menu_id}" role="menubar">',
            f'        {{#loop {ctx.data_path} as {item_var}}}',
        ])
        lines.extend(self.item_render("menu-item", "menu-link", item_var, "          "))

        if ctx.desktop_depth > 0:
            level = MarkupLevel(depth=1, max_depth=ctx.desktop_depth, var_name=item_var, indent="            ")
            lines.extend(self.submenu_render(level))

        lines.extend([
            "          </li>",
            "        {/loop}",
            "      </ul>",
            "    </div>",
            "  </div>",
            "</nav>",
        ])
        return "\n".join(lines)

    def hamburger_render(self, indent: str) -> List[str]:
        """Hamburger toggle button with its three icon lines"""
        ctx = self.context
        line = f'{indent}  <span class="{ctx.className_make("hamburger-line")}"></span>'
        return [
            f'{indent}<button class="{ctx.className_make("hamburger")}" type="button"',
            f'{indent}        aria-label="Toggle navigation menu"',
            f'{indent}        aria-expanded="false"',
            f'{indent}        aria-controls="{ctx.menu_id}">',
            line,
            line,
            line,
            f'{indent}</button>',
        ]

    def item_render(self, item_element: str, link_element: str, var: str, indent: str) -> List[str]:
        """Opening <li> and its link; the caller closes the <li>"""
        ctx = self.context
        return [
            f'{indent}<li class="{ctx.className_make(item_element)} {{{var}.state_classes}}" role="none">',
            f'{indent}  <a href="{{{var}.url}}"',
            f'{indent}     class="{ctx.className_make(link_element)} {{{var}.link_classes}}"',
            f'{indent}     role="menuitem">',
            f'{indent}    {{{var}.title}}',
            f'{indent}  </a>',
        ]

    def submenuToggle_render(self, indent: str) -> List[str]:
        """Button that expands a submenu on mobile"""
        ctx = self.context
        return [
            f'{indent}<button class="{ctx.className_make("submenu-toggle")}" type="button"',
            f'{indent}        aria-label="Toggle submenu"',
            f'{indent}        aria-expanded="false">',
            f'{indent}  <span class="{ctx.className_make("submenu-toggle-icon")}" aria-hidden="true"></span>',
            f'{indent}</button>',
        ]

    def submenu_render(self, level: MarkupLevel) -> List[str]:
        """
        Render one submenu level and, recursively, the levels below it.

        Returns an empty list once the level exceeds max_depth.
        """
        if level.depth > level.max_depth:
            return []

        ctx = self.context
        indent = level.indent
        next_var = depthVar_name(level.depth, self.var_names)

        lines = [f'{indent}{{#if {level.var_name}.children}}']
        if ctx.mobile:
            lines.extend(self.submenuToggle_render(indent + INDENT_STEP))
        lines.extend([
            f'{indent}  <ul class="{ctx.className_make("submenu")} '
            f'{ctx.className_make("submenu", f"level-{level.depth}")}" role="menu">',
            f'{indent}    {{#loop {level.var_name}.children as {next_var}}}',
        ])
        lines.extend(self.item_render("submenu-item", "submenu-link", next_var, indent + INDENT_STEP * 3))
        lines.extend(self.submenu_render(level.descend(next_var)))
        lines.extend([
            f'{indent}      </li>',
            f'{indent}    {{/loop}}',
            f'{indent}  </ul>',
            f'{indent}{{/if}}',
        ])
        return lines
