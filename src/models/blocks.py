"""
Block tree models

Typed nodes of the structure document consumed by the ETCH visual editor.
Serialisation follows the Gutenberg-shaped JSON the editor imports:

    {
        "blockName": "etch/element",
        "attrs": {...},
        "innerBlocks": [...],
        "innerHTML": "\n\n",
        "innerContent": ["\n\n"]
    }

innerHTML / innerContent carry no meaning for the generator; they are
derived from the child count only (see separators_make).
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterator, List, Optional, Tuple

from .css import CssRule


def separators_make(count: int) -> Tuple[str, List[Optional[str]]]:
    """
    Derive the editor's serialisation hints from a child count.

    Zero children give a single gap marker. N children give a leading
    marker, N child slots (None) separated by N-1 gap markers, and a
    trailing marker.

    Example:
        >>> separators_make(0)
        ('\\n\\n', ['\\n\\n'])
        >>> separators_make(2)
        ('\\n\\n\\n\\n', ['\\n', None, '\\n\\n', None, '\\n'])
    """
    if count <= 0:
        return "\n\n", ["\n\n"]

    slots: List[Optional[str]] = ["\n"]
    for index in range(count):
        if index:
            slots.append("\n\n")
        slots.append(None)
    slots.append("\n")

    markup = "".join(slot for slot in slots if slot is not None)
    return markup, slots


@dataclass
class Block:
    """
    Base of every block.

    Attributes:
        label: Name shown in the editor's structure panel
        children: Nested blocks in document order
    """
    label: str = ""
    children: List["Block"] = field(default_factory=list)

    block_name: ClassVar[str] = "etch/block"

    def attrs_build(self) -> Dict[str, Any]:
        return {'metadata': {'name': self.label}}

    def walk(self) -> Iterator["Block"]:
        """Depth-first iteration over this block and all descendants"""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        inner_html, inner_content = separators_make(len(self.children))
        return {
            'blockName': self.block_name,
            'attrs': self.attrs_build(),
            'innerBlocks': [child.to_dict() for child in self.children],
            'innerHTML': inner_html,
            'innerContent': inner_content,
        }


@dataclass
class ElementBlock(Block):
    """An HTML element with attributes and style references"""
    tag: str = "div"
    attributes: Dict[str, str] = field(default_factory=dict)
    style_refs: List[str] = field(default_factory=list)

    block_name: ClassVar[str] = "etch/element"

    def class_first(self) -> str:
        """First class token of the class attribute, "" when unclassed"""
        classes = self.attributes.get('class', '').split()
        return classes[0] if classes else ""

    def attrs_build(self) -> Dict[str, Any]:
        attrs = super().attrs_build()
        attrs['tag'] = self.tag
        attrs['attributes'] = dict(self.attributes)
        attrs['styles'] = list(self.style_refs)
        return attrs


@dataclass
class TextBlock(Block):
    """Literal or template text ("{item.title}")"""
    content: str = ""

    block_name: ClassVar[str] = "etch/text"

    def attrs_build(self) -> Dict[str, Any]:
        attrs = super().attrs_build()
        attrs['content'] = self.content
        return attrs


@dataclass
class LoopBlock(Block):
    """Repeats its children for every entry of a data path"""
    target: str = ""
    item_id: str = "item"

    block_name: ClassVar[str] = "etch/loop"

    def attrs_build(self) -> Dict[str, Any]:
        attrs = super().attrs_build()
        attrs['target'] = self.target
        attrs['itemId'] = self.item_id
        return attrs


@dataclass
class ConditionBlock(Block):
    """Renders its children only when the condition holds"""
    left: str = ""
    operator: str = "isTruthy"
    right: Optional[str] = None

    block_name: ClassVar[str] = "etch/condition"

    def attrs_build(self) -> Dict[str, Any]:
        attrs = super().attrs_build()
        attrs['condition'] = {
            'leftHand': self.left,
            'operator': self.operator,
            'rightHand': self.right,
        }
        attrs['conditionString'] = self.left
        return attrs


@dataclass(frozen=True)
class StyleEntry:
    """
    One entry of the editor's style map.

    The editor de-duplicates entries by selector and keeps the last one, so
    every selector appears in exactly one entry (see blocktree.styleMap_build).
    """
    key: str
    selector: str
    css: str
    collection: str = "default"
    readonly: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': 'class',
            'selector': self.selector,
            'collection': self.collection,
            'css': self.css,
            'readonly': self.readonly,
        }


@dataclass
class BlockTree:
    """Block tree renderer output: root block plus its style map"""
    root: ElementBlock
    styles: Dict[str, StyleEntry] = field(default_factory=dict)
    rules: List[CssRule] = field(default_factory=list)

    def styles_toDict(self) -> Dict[str, Dict[str, Any]]:
        return {key: entry.to_dict() for key, entry in self.styles.items()}
