"""
Identifier sanitising

Turns menu names and user text into identifiers safe for the three places
the generator writes them:

    identifier_toSnake  - data-path keys       ("Main Menu" -> "main_menu")
    identifier_toKebab  - CSS class prefixes   ("Main Menu" -> "main-menu")
    identifier_toProp   - component prop names ("menu Items!" -> "menuItems")

All three are total: invalid input yields "" and callers substitute a
fallback from the app settings.
"""

import re


def identifier_toSnake(text: str) -> str:
    """
    Lowercase snake_case identifier.

    Example:
        >>> identifier_toSnake("Main Menu - Footer")
        'main_menu_footer'
    """
    value = str(text or "").lower()
    value = re.sub(r'[ \-]', '_', value)
    value = re.sub(r'[^a-z0-9_]', '', value)
    value = re.sub(r'_+', '_', value)
    return value.strip('_')


def identifier_toKebab(text: str) -> str:
    """
    Lowercase kebab-case identifier for CSS classes.

    Example:
        >>> identifier_toKebab("Main_Menu  (Top)")
        'main-menu-top'
    """
    value = str(text or "").lower()
    value = re.sub(r'[ _]', '-', value)
    value = re.sub(r'[^a-z0-9\-]', '', value)
    value = re.sub(r'-+', '-', value)
    return value.strip('-')


def identifier_toProp(text: str) -> str:
    """
    Prop name with case preserved (camelCase survives).

    Example:
        >>> identifier_toProp("menu-Items 2")
        'menuItems2'
    """
    return re.sub(r'[^A-Za-z0-9_]', '', str(text or ""))
