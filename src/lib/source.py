"""
Menu source and option file loading for the command line host.

A menu file holds either a bare list of items, a single menu

    name: Main Menu
    items:
      - {id: 1, title: Home, url: /}

or several menus, selected by the menuId option:

    menus:
      - {id: 3, name: Main Menu, items: [...]}
      - {id: 4, name: Footer, items: [...]}

menuSources_fromData returns every menu of the file for the options.menus
export.

Files ending in .json are read with json, anything else with PyYAML.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import yaml

from ..models.menu import MenuItem, MenuSource
from .log import LOG


class MenuSourceError(Exception):
    """Raised when a menu or options file cannot be loaded or has no usable menu"""
    pass


def document_load(path: Union[str, Path]) -> Any:
    """
    Parse a JSON or YAML file.

    Raises:
        MenuSourceError: If the file is missing or does not parse
    """
    path = Path(path)
    if not path.exists():
        raise MenuSourceError(f"File not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                return json.load(f)
            return yaml.safe_load(f)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise MenuSourceError(f"Failed to parse {path.name}: {e}")
    except OSError as e:
        raise MenuSourceError(f"Failed to read {path.name}: {e}")


def items_parse(entries: Any) -> List[MenuItem]:
    """Convert raw item mappings to MenuItem objects"""
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise MenuSourceError(f"Menu items must be a list, got {type(entries).__name__}")

    items = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise MenuSourceError(f"Menu item #{index} is not a mapping")
        items.append(MenuItem.from_dict(entry))
    return items


def menuSource_fromData(data: Any, menu_id: Optional[int] = None) -> MenuSource:
    """
    Select and parse one menu from loaded file data.

    Args:
        data: Parsed file contents
        menu_id: Menu to pick when the file holds several

    Raises:
        MenuSourceError: If no menu matches the selection
    """
    if isinstance(data, list):
        return MenuSource(name="", items=tuple(items_parse(data)))

    if not isinstance(data, Mapping):
        raise MenuSourceError("No menu selected: menu file is empty or not a mapping")

    if 'menus' in data:
        menus = data.get('menus') or []
        if not isinstance(menus, list) or not menus:
            raise MenuSourceError("No menu selected: 'menus' is empty")
        if menu_id is None:
            if len(menus) > 1:
                raise MenuSourceError(
                    f"No menu selected: file holds {len(menus)} menus, set menuId to choose one"
                )
            chosen = menus[0]
        else:
            chosen = next(
                (menu for menu in menus if isinstance(menu, Mapping) and str(menu.get('id')) == str(menu_id)),
                None,
            )
            if chosen is None:
                raise MenuSourceError(f"Menu {menu_id} not found")
        data = chosen

    if not isinstance(data, Mapping):
        raise MenuSourceError("No menu selected: menu entry is not a mapping")

    source = MenuSource(
        name=str(data.get('name') or ""),
        items=tuple(items_parse(data.get('items'))),
    )
    LOG(f"Menu {source.name!r}: {len(source.items)} items", level=2)
    return source


def menuSources_fromData(data: Any) -> List[MenuSource]:
    """
    Every menu held by loaded file data, in file order.

    A bare item list or a single menu gives one source; entries of a
    'menus' list that are not mappings are skipped.
    """
    if isinstance(data, list):
        return [MenuSource(name="", items=tuple(items_parse(data)))]
    if not isinstance(data, Mapping):
        return []
    if 'menus' not in data:
        return [MenuSource(name=str(data.get('name') or ""), items=tuple(items_parse(data.get('items'))))]

    menus = data.get('menus') or []
    if not isinstance(menus, list):
        raise MenuSourceError("'menus' must be a list")
    return [
        MenuSource(name=str(menu.get('name') or ""), items=tuple(items_parse(menu.get('items'))))
        for menu in menus
        if isinstance(menu, Mapping)
    ]


def menuSource_load(path: Union[str, Path], menu_id: Optional[int] = None) -> MenuSource:
    """Load one menu from a JSON or YAML file"""
    return menuSource_fromData(document_load(path), menu_id)


def options_load(path: Union[str, Path, None]) -> Dict[str, Any]:
    """
    Load a raw option mapping.

    A missing path gives an empty mapping (all defaults).

    Raises:
        MenuSourceError: If the file is not a mapping
    """
    if path is None:
        return {}
    data = document_load(path)
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise MenuSourceError(f"Options file {Path(path).name} must contain a mapping")
    return dict(data)
