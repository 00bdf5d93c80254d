"""
etchnav - navigation code generator for the ETCH page builder

Turns a WordPress-style flat menu into template markup, a stylesheet, a
behaviour script and an ETCH block-tree import document.
"""

__version__ = "1.0.0"

from .lib import LOG, NavigationGenerator, generate, state_connectToLogger
from .models import MenuItem, MenuSource, NavOptions

__all__ = [
    "NavigationGenerator",
    "generate",
    "MenuItem",
    "MenuSource",
    "NavOptions",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
