"""
Menu data models

Flat items as supplied by the host menu storage, and the nested nodes the
tree builder derives from them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Tuple


def _int_coerce(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def flag_coerce(value: Any) -> bool:
    """Loose boolean: strings count as true only when they spell one of TRUE_STRINGS"""
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def _classes_coerce(value: Any) -> Tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        return tuple(value.split())
    return tuple(str(c) for c in value if c)


@dataclass(frozen=True)
class MenuItem:
    """
    One flat navigation entry, exactly as the host hands it over.

    Attributes:
        id: Unique item id within the menu
        title: Link label
        url: Link target URL
        target: Link target window ("" or "_blank")
        parent_id: Id of the parent item, 0 for top-level items
        css_classes: Extra CSS classes configured on the item
        is_current: Host says this item is the page being viewed
        is_current_ancestor: Host says a descendant is the page being viewed
    """
    id: int
    title: str
    url: str = ""
    target: str = ""
    parent_id: int = 0
    css_classes: Tuple[str, ...] = ()
    is_current: bool = False
    is_current_ancestor: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MenuItem":
        """
        Build an item from a loosely keyed mapping.

        Accepts the generator's own snake_case names, camelCase names and the
        WordPress nav_menu_item names (ID, menu_item_parent, classes, current,
        current_item_ancestor).

        Example:
            >>> MenuItem.from_dict({"ID": 7, "title": "Home", "menu_item_parent": "0"}).id
            7
        """
        def first(*keys: str, default: Any = None) -> Any:
            for key in keys:
                if key in data and data[key] is not None:
                    return data[key]
            return default

        return cls(
            id=_int_coerce(first("id", "ID")),
            title=str(first("title", "label", default="")),
            url=str(first("url", "href", default="")),
            target=str(first("target", default="")),
            parent_id=_int_coerce(first("parent_id", "parentId", "menu_item_parent", "parent")),
            css_classes=_classes_coerce(first("css_classes", "cssClasses", "classes")),
            is_current=flag_coerce(first("is_current", "isCurrent", "current", default=False)),
            is_current_ancestor=flag_coerce(
                first(
                    "is_current_ancestor",
                    "isCurrentAncestor",
                    "current_item_ancestor",
                    "current_item_parent",
                    default=False,
                )
            ),
        )


@dataclass
class MenuNode:
    """
    A menu item placed in the tree.

    state_classes and link_classes are filled in by the annotation pass once
    the whole forest is linked (has-submenu depends on children).
    """
    id: int
    title: str
    url: str
    target: str
    css_classes: Tuple[str, ...] = ()
    is_current: bool = False
    is_current_ancestor: bool = False
    children: List["MenuNode"] = field(default_factory=list)
    state_classes: str = ""
    link_classes: str = ""

    @classmethod
    def from_item(cls, item: MenuItem) -> "MenuNode":
        """Create an unlinked node shell for an item"""
        return cls(
            id=item.id,
            title=item.title,
            url=item.url,
            target=item.target,
            css_classes=item.css_classes,
            is_current=item.is_current,
            is_current_ancestor=item.is_current_ancestor,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Menu preview representation, recursively including children"""
        return {
            'id': self.id,
            'title': self.title,
            'url': self.url,
            'target': self.target,
            'classes': ' '.join(self.css_classes),
            'current': self.is_current,
            'current_parent': self.is_current_ancestor,
            'state_classes': self.state_classes,
            'link_classes': self.link_classes,
            'children': [child.to_dict() for child in self.children],
        }


@dataclass(frozen=True)
class MenuSource:
    """
    External menu data handed to the generator.

    Attributes:
        name: Human menu name ("Main Menu"); drives the data-path slug and
              the default class prefix
        items: Flat items in host order
    """
    name: str = ""
    items: Tuple[MenuItem, ...] = ()
