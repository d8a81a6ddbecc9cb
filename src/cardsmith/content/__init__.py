"""Content tree and math tokenization for flashcard markup."""

from __future__ import annotations

from .nodes import (
    Box,
    Element,
    Fragment,
    MathBlock,
    MathInline,
    MathUnit,
    Node,
    NodeKind,
    Paragraph,
    Raw,
    Text,
    iter_math_units,
    iter_preorder,
    parse_fragment,
    serialize,
    text_content,
)
from .tokenizer import MathTokenizer, normalize_math_units, tokenize, tokenize_fragment


__all__ = [
    "Box",
    "Element",
    "Fragment",
    "MathBlock",
    "MathInline",
    "MathTokenizer",
    "MathUnit",
    "Node",
    "NodeKind",
    "Paragraph",
    "Raw",
    "Text",
    "iter_math_units",
    "iter_preorder",
    "normalize_math_units",
    "parse_fragment",
    "serialize",
    "text_content",
    "tokenize",
    "tokenize_fragment",
]
