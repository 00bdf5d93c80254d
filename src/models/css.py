"""
Stylesheet rule model

The stylesheet renderer builds one ordered table of CssRule entries. Two
serialisers consume it: the nested string stylesheet and the block tree's
per-selector style map.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class CssRule:
    """
    One flat CSS rule.

    Attributes:
        selector: Full (flat) selector, comma separated for grouped selectors
                  (e.g. ".global-nav__menu-link:hover, .global-nav__menu-link:focus")
        declarations: Declarations without trailing semicolons
                      (e.g. ("color: var(--nav-accent)",))
        media: Media query condition the rule lives in, None for base rules
               (e.g. "(max-width: 1200px)")
    """
    selector: str
    declarations: Tuple[str, ...]
    media: Optional[str] = None

    def body_render(self, indent: str = "  ") -> str:
        """Declarations as indented lines, each terminated by ';'"""
        return "\n".join(f"{indent}{declaration};" for declaration in self.declarations)

    def selectors_split(self) -> Tuple[str, ...]:
        """Individual selectors of a grouped rule"""
        return tuple(part.strip() for part in self.selector.split(",") if part.strip())
