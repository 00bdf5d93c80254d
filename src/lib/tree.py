"""
Menu tree builder

Converts the host's flat, parent-referenced item list into a forest of
MenuNode objects and annotates each node with UI state classes.

Build is two passes over the items:
1. Index: one node shell per item id
2. Link:  each non-root node is appended to its parent's children; items
          whose parent id is unknown are orphans and silently dropped

The state annotation pass runs afterwards over the finished forest,
because has-submenu depends on children being linked.

Example:
    >>> forest = menuTree_build([
    ...     MenuItem(id=1, title="Home", url="/"),
    ...     MenuItem(id=2, title="About", url="/about"),
    ...     MenuItem(id=3, title="Team", url="/about/team", parent_id=2),
    ... ])
    >>> [node.title for node in forest]
    ['Home', 'About']
    >>> forest[1].state_classes
    'has-submenu'
"""

import json
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple
from urllib.parse import urlsplit

from ..models.menu import MenuItem, MenuNode
from .log import LOG


STATE_CURRENT = "is-current"
STATE_CURRENT_PARENT = "is-current-parent"
STATE_HAS_SUBMENU = "has-submenu"
LINK_CURRENT = "current-page"


def menuTree_build(items: Iterable[MenuItem]) -> List[MenuNode]:
    """
    Build and annotate the menu forest.

    Args:
        items: Flat items in host order

    Returns:
        Root nodes (parent_id == 0) in input order, children in input order.
        Never raises; an empty input gives an empty forest.
    """
    items = list(items)
    nodes: Dict[int, MenuNode] = {}

    # Pass 1: index
    for item in items:
        nodes[item.id] = MenuNode.from_item(item)

    # Pass 2: link
    forest: List[MenuNode] = []
    orphans = 0
    for item in items:
        node = nodes[item.id]
        if item.parent_id == 0:
            forest.append(node)
        elif item.parent_id in nodes:
            nodes[item.parent_id].children.append(node)
        else:
            orphans += 1

    LOG(f"Built menu tree: {len(forest)} roots from {len(items)} items", level=2)
    if orphans:
        LOG(f"Dropped {orphans} orphaned menu item(s)", level=3)

    menuTree_annotate(forest)
    return forest


def stateClasses_compute(node: MenuNode) -> str:
    """
    Space-joined state flags in fixed order.

    Order is is-current, is-current-parent, has-submenu; a flag is present
    only when true.
    """
    flags = []
    if node.is_current:
        flags.append(STATE_CURRENT)
    if node.is_current_ancestor:
        flags.append(STATE_CURRENT_PARENT)
    if node.children:
        flags.append(STATE_HAS_SUBMENU)
    return " ".join(flags)


def linkClasses_compute(node: MenuNode) -> str:
    """Class for the item's link: current-page on the current item only"""
    return LINK_CURRENT if node.is_current else ""


def menuTree_annotate(forest: Sequence[MenuNode]) -> None:
    """Fill state_classes / link_classes on every node of a linked forest"""
    stack = list(forest)
    while stack:
        node = stack.pop()
        node.state_classes = stateClasses_compute(node)
        node.link_classes = linkClasses_compute(node)
        stack.extend(node.children)


def menuTree_toDicts(forest: Sequence[MenuNode]) -> List[Dict[str, Any]]:
    """Plain nested representation of the forest (menu preview data)"""
    return [node.to_dict() for node in forest]


def menuTree_toJSON(forest: Sequence[MenuNode], indent: int = 4) -> str:
    """Menu preview JSON for human inspection"""
    return json.dumps(menuTree_toDicts(forest), indent=indent)


def url_normalise(url: str) -> Tuple[str, str]:
    """
    Reduce a URL to (host, path) for current-page matching.

    Query strings and fragments are ignored, the host is lowercased and a
    trailing slash is dropped (the root path stays "/").

    Example:
        >>> url_normalise("https://Example.com/about/?ref=nav#team")
        ('example.com', '/about')
    """
    parts = urlsplit(url or "")
    path = parts.path.rstrip("/") or "/"
    return parts.netloc.lower(), path


def url_matches(item_url: str, current_url: str, match: str = "exact") -> bool:
    """
    Decide whether a menu item URL points at the current page.

    Hosts are compared only when both URLs carry one. "exact" compares the
    normalised paths. "prefix" also accepts the current path lying below the
    item path on a segment boundary; the root path "/" only ever matches
    exactly.
    """
    if not item_url:
        return False
    item_host, item_path = url_normalise(item_url)
    current_host, current_path = url_normalise(current_url)
    if item_host and current_host and item_host != current_host:
        return False
    if item_path == current_path:
        return True
    if match == "prefix" and item_path != "/":
        return current_path.startswith(item_path + "/")
    return False


def currentPage_annotate(
    items: Sequence[MenuItem], current_url: Optional[str], match: str = "exact"
) -> Tuple[MenuItem, ...]:
    """
    Derive current / current-ancestor flags from a current URL.

    Used when no host routing context is available. Items matching the URL
    become current; every item on the parent chain of a current item
    becomes a current ancestor. Flags already supplied by the host are
    kept.

    Args:
        items: Flat items
        current_url: URL of the page being rendered; None leaves items as-is
        match: "exact" or "prefix" (see url_matches)

    Returns:
        New items with flags set (inputs are frozen and left untouched)
    """
    items = tuple(items)
    if not current_url:
        return items

    by_id = {item.id: item for item in items}
    current_ids = {
        item.id for item in items
        if item.is_current or url_matches(item.url, current_url, match)
    }

    ancestor_ids: Set[int] = set()
    for item_id in current_ids:
        seen: Set[int] = set()
        parent_id = by_id[item_id].parent_id
        while parent_id and parent_id in by_id and parent_id not in seen:
            seen.add(parent_id)
            ancestor_ids.add(parent_id)
            parent_id = by_id[parent_id].parent_id

    LOG(f"Current page {current_url!r}: {len(current_ids)} current, {len(ancestor_ids)} ancestors", level=2)

    return tuple(
        replace(
            item,
            is_current=item.id in current_ids,
            is_current_ancestor=item.is_current_ancestor or item.id in ancestor_ids,
        )
        for item in items
    )
