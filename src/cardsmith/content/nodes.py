"""Lightweight content tree for flashcard markup fragments.

Stored flashcard sides are HTML fragments. They are parsed with BeautifulSoup
into a small tree of tagged variants so that the tokenizer and the exporter can
walk and rewrite them without a browser DOM. Every variant carries only its own
attributes; traversal and serialization dispatch on :class:`NodeKind`.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
import html
from typing import ClassVar, TypeAlias

from bs4 import BeautifulSoup
from bs4.element import (
    CData,
    Comment,
    Declaration,
    Doctype,
    NavigableString,
    ProcessingInstruction,
    Tag,
)


MATH_DELIMITER = "$"

INLINE_MATH_TYPES = frozenset({"inlineMath", "inline-math"})
BLOCK_MATH_TYPES = frozenset({"blockMath", "block-math"})

VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)
RAW_TEXT_ELEMENTS = frozenset({"script", "style"})


class NodeKind(Enum):
    FRAGMENT = "fragment"
    TEXT = "text"
    RAW = "raw"
    ELEMENT = "element"
    PARAGRAPH = "paragraph"
    BOX = "box"
    MATH_INLINE = "math_inline"
    MATH_BLOCK = "math_block"


@dataclass(slots=True)
class Text:
    kind: ClassVar[NodeKind] = NodeKind.TEXT

    text: str


@dataclass(slots=True)
class Raw:
    """Markup kept verbatim (comments, doctypes, processing instructions)."""

    kind: ClassVar[NodeKind] = NodeKind.RAW

    markup: str


@dataclass(slots=True)
class Element:
    kind: ClassVar[NodeKind] = NodeKind.ELEMENT

    tag: str
    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)


@dataclass(slots=True)
class Paragraph:
    kind: ClassVar[NodeKind] = NodeKind.PARAGRAPH

    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)


@dataclass(slots=True)
class Box:
    """Boxed aside region of a flashcard side."""

    kind: ClassVar[NodeKind] = NodeKind.BOX

    attrs: dict[str, str] = field(default_factory=dict)
    children: list[Node] = field(default_factory=list)


@dataclass(slots=True)
class MathInline:
    """Inline math unit; ``display`` mirrors the ``data-display`` flag."""

    kind: ClassVar[NodeKind] = NodeKind.MATH_INLINE

    latex: str
    display: bool = False
    evaluate: bool = False
    attrs: dict[str, str] = field(default_factory=dict)

    @property
    def fallback(self) -> str:
        delimiter = MATH_DELIMITER * (2 if self.display else 1)
        return f"{delimiter}{self.latex}{delimiter}"


@dataclass(slots=True)
class MathBlock:
    """Display math unit occupying its own block."""

    kind: ClassVar[NodeKind] = NodeKind.MATH_BLOCK

    latex: str
    attrs: dict[str, str] = field(default_factory=dict)

    @property
    def display(self) -> bool:
        return True

    @property
    def fallback(self) -> str:
        return f"{MATH_DELIMITER * 2}{self.latex}{MATH_DELIMITER * 2}"


@dataclass(slots=True)
class Fragment:
    kind: ClassVar[NodeKind] = NodeKind.FRAGMENT

    children: list[Node] = field(default_factory=list)


Node: TypeAlias = Text | Raw | Element | Paragraph | Box | MathInline | MathBlock | Fragment
MathUnit: TypeAlias = MathInline | MathBlock
ParentNode: TypeAlias = Element | Paragraph | Box | Fragment
MathRenderer: TypeAlias = Callable[[MathUnit], str | None]

_MATH_ATTRIBUTES = frozenset({"data-type", "data-latex", "data-display", "data-evaluate"})


def is_math_unit(node: Node | None) -> bool:
    return node is not None and node.kind in (NodeKind.MATH_INLINE, NodeKind.MATH_BLOCK)


def has_children(node: Node) -> bool:
    return node.kind in (
        NodeKind.FRAGMENT,
        NodeKind.ELEMENT,
        NodeKind.PARAGRAPH,
        NodeKind.BOX,
    )


# ---------------------------------------------------------------------- parsing


def parse_fragment(markup: str | None) -> Fragment:
    """Parse an HTML fragment into a content tree; never raises on bad markup."""
    if not markup:
        return Fragment()
    soup = BeautifulSoup(markup, "html.parser", multi_valued_attributes=None)
    return Fragment(children=_convert_children(soup))


def _convert_children(tag: Tag) -> list[Node]:
    children: list[Node] = []
    for child in tag.children:
        node = _convert(child)
        if node is not None:
            children.append(node)
    return children


def _convert(item: object) -> Node | None:
    if isinstance(item, Tag):
        return _convert_tag(item)
    if isinstance(item, Comment):
        return Raw(f"<!--{item}-->")
    if isinstance(item, Doctype):
        return Raw(f"<!DOCTYPE {item}>")
    if isinstance(item, CData):
        return Raw(f"<![CDATA[{item}]]>")
    if isinstance(item, ProcessingInstruction):
        return Raw(f"<?{item}>")
    if isinstance(item, Declaration):
        return Raw(f"<!{item}>")
    if isinstance(item, NavigableString):
        text = str(item)
        return Text(text) if text else None
    return None


def _convert_tag(tag: Tag) -> Node:
    attrs = {key: _attribute_text(value) for key, value in tag.attrs.items()}
    data_type = attrs.get("data-type")

    if data_type in INLINE_MATH_TYPES or data_type in BLOCK_MATH_TYPES:
        latex = attrs.get("data-latex")
        if latex is None:
            latex = tag.get_text()
        extra = {key: value for key, value in attrs.items() if key not in _MATH_ATTRIBUTES}
        if data_type in BLOCK_MATH_TYPES:
            return MathBlock(latex=latex, attrs=extra)
        return MathInline(
            latex=latex,
            display=attrs.get("data-display") == "yes",
            evaluate=attrs.get("data-evaluate") == "yes",
            attrs=extra,
        )

    children = _convert_children(tag)
    if tag.name == "p":
        return Paragraph(attrs=attrs, children=children)
    if tag.name == "aside":
        return Box(attrs=attrs, children=children)
    return Element(tag=tag.name, attrs=attrs, children=children)


def _attribute_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(item) for item in value)
    return str(value)


# ---------------------------------------------------------------- serialization


def serialize(node: Node, *, math: MathRenderer | None = None) -> str:
    """Serialize a content tree back into HTML.

    ``math`` may return rendered inner markup for a math unit; when it is
    missing or returns ``None`` the unit keeps its delimiter-wrapped text.
    """
    parts: list[str] = []
    _serialize_into(node, parts, math, raw_text=False)
    return "".join(parts)


def _serialize_into(
    node: Node,
    parts: list[str],
    math: MathRenderer | None,
    *,
    raw_text: bool,
) -> None:
    match node.kind:
        case NodeKind.FRAGMENT:
            for child in node.children:
                _serialize_into(child, parts, math, raw_text=raw_text)
        case NodeKind.TEXT:
            parts.append(node.text if raw_text else html.escape(node.text, quote=False))
        case NodeKind.RAW:
            parts.append(node.markup)
        case NodeKind.PARAGRAPH:
            _serialize_element("p", node.attrs, node.children, parts, math)
        case NodeKind.BOX:
            _serialize_element("aside", node.attrs, node.children, parts, math)
        case NodeKind.ELEMENT:
            _serialize_element(node.tag, node.attrs, node.children, parts, math)
        case NodeKind.MATH_INLINE | NodeKind.MATH_BLOCK:
            parts.append(_serialize_math(node, math))
        case _:  # pragma: no cover - exhaustive over NodeKind
            raise TypeError(f"Unsupported node kind: {node.kind!r}")


def _serialize_element(
    tag: str,
    attrs: dict[str, str],
    children: list[Node],
    parts: list[str],
    math: MathRenderer | None,
) -> None:
    parts.append(f"<{tag}{_format_attributes(attrs)}>")
    if tag in VOID_ELEMENTS:
        return
    raw_text = tag in RAW_TEXT_ELEMENTS
    for child in children:
        _serialize_into(child, parts, math, raw_text=raw_text)
    parts.append(f"</{tag}>")


def math_unit_attributes(unit: MathUnit) -> dict[str, str]:
    """Return the data-attribute encoding of a math unit."""
    extra = dict(unit.attrs)
    if unit.kind is NodeKind.MATH_BLOCK:
        return {"data-type": "blockMath", "data-latex": unit.latex, **extra}
    return {
        "data-type": "inlineMath",
        "data-latex": unit.latex,
        "data-evaluate": "yes" if unit.evaluate else "no",
        "data-display": "yes" if unit.display else "no",
        **extra,
    }


def _serialize_math(unit: MathUnit, math: MathRenderer | None) -> str:
    tag = "div" if unit.kind is NodeKind.MATH_BLOCK else "span"
    inner = math(unit) if math is not None else None
    if inner is None:
        inner = html.escape(unit.fallback, quote=False)
    return f"<{tag}{_format_attributes(math_unit_attributes(unit))}>{inner}</{tag}>"


def _format_attributes(attrs: dict[str, str]) -> str:
    return "".join(f' {key}="{html.escape(value, quote=True)}"' for key, value in attrs.items())


# -------------------------------------------------------------------- traversal


def iter_preorder(
    node: Node, parent: ParentNode | None = None
) -> Iterator[tuple[Node, ParentNode | None]]:
    """Yield ``(node, parent)`` pairs in document order."""
    yield node, parent
    if has_children(node):
        for child in list(node.children):
            yield from iter_preorder(child, node)


def iter_math_units(node: Node) -> Iterator[MathUnit]:
    for candidate, _parent in iter_preorder(node):
        if is_math_unit(candidate):
            yield candidate


def text_content(node: Node) -> str:
    """Return the concatenated text of a subtree, math units as their fallback."""
    match node.kind:
        case NodeKind.TEXT:
            return node.text
        case NodeKind.RAW:
            return ""
        case NodeKind.MATH_INLINE | NodeKind.MATH_BLOCK:
            return node.fallback
        case _:
            return "".join(text_content(child) for child in node.children)


__all__ = [
    "BLOCK_MATH_TYPES",
    "INLINE_MATH_TYPES",
    "MATH_DELIMITER",
    "RAW_TEXT_ELEMENTS",
    "Box",
    "Element",
    "Fragment",
    "MathBlock",
    "MathInline",
    "MathRenderer",
    "MathUnit",
    "Node",
    "NodeKind",
    "Paragraph",
    "ParentNode",
    "Raw",
    "Text",
    "has_children",
    "is_math_unit",
    "iter_math_units",
    "iter_preorder",
    "math_unit_attributes",
    "parse_fragment",
    "serialize",
    "text_content",
]
