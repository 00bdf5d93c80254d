"""
etchnav - navigation code generator for the ETCH page builder

Builds a menu tree from flat items and renders it into template markup, a
stylesheet, a behaviour script and an ETCH block-tree document.
"""

__version__ = "1.0.0"

from .log import LOG, state_connectToLogger, state_disconnectFromLogger
from .sanitize import identifier_toKebab, identifier_toProp, identifier_toSnake
from .tree import currentPage_annotate, menuTree_build, menuTree_toDicts, menuTree_toJSON
from .markup import MarkupRenderer
from .stylesheet import StylesheetRenderer
from .script import ScriptRenderer
from .blocktree import BlockTreeRenderer, styleMap_build
from .generator import GeneratedNavigation, NavigationGenerator, context_resolve, generate, menusOption_build
from .source import (
    MenuSourceError,
    document_load,
    menuSource_fromData,
    menuSource_load,
    menuSources_fromData,
    options_load,
)
from .report import report_render

__all__ = [
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "identifier_toSnake",
    "identifier_toKebab",
    "identifier_toProp",
    "menuTree_build",
    "menuTree_toDicts",
    "menuTree_toJSON",
    "currentPage_annotate",
    "MarkupRenderer",
    "StylesheetRenderer",
    "ScriptRenderer",
    "BlockTreeRenderer",
    "styleMap_build",
    "NavigationGenerator",
    "GeneratedNavigation",
    "context_resolve",
    "generate",
    "menusOption_build",
    "MenuSourceError",
    "document_load",
    "menuSource_fromData",
    "menuSource_load",
    "menuSources_fromData",
    "options_load",
    "report_render",
    "__version__",
]
