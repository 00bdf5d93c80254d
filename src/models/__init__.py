"""
Models package for etchnav

Contains the data structures shared by the renderers and the CLI pipeline.
"""

from .state import ProgramState, pipeline
from .menu import MenuItem, MenuNode, MenuSource
from .options import NavOptions
from .context import RenderContext
from .css import CssRule
from .blocks import (
    Block,
    BlockTree,
    ConditionBlock,
    ElementBlock,
    LoopBlock,
    StyleEntry,
    TextBlock,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "MenuItem",
    "MenuNode",
    "MenuSource",
    "NavOptions",
    "RenderContext",
    "CssRule",
    "Block",
    "BlockTree",
    "ConditionBlock",
    "ElementBlock",
    "LoopBlock",
    "StyleEntry",
    "TextBlock",
]
