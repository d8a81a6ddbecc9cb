"""Convert raw ``$...$`` notation in markup into structured math units."""

from __future__ import annotations

import re

from .nodes import (
    RAW_TEXT_ELEMENTS,
    Fragment,
    MathInline,
    Node,
    NodeKind,
    Text,
    is_math_unit,
    iter_math_units,
    iter_preorder,
    parse_fragment,
    serialize,
)


# One or two delimiters on each side of a non-empty payload.
_WRAPPED_EXPRESSION = re.compile(r"\$\$?(.+?)\$\$?", re.DOTALL)

# Non-greedy, non-nested; ``$$`` is not special-cased and yields short matches.
_INLINE_MATH = re.compile(r"\$([^$]+?)\$")


def strip_math_delimiters(text: str) -> str:
    """Remove one or two wrapping ``$`` from each side of ``text`` if present."""
    match = _WRAPPED_EXPRESSION.fullmatch(text)
    return match.group(1) if match else text


def normalize_math_units(fragment: Node) -> Node:
    """Strip redundant delimiter residue from every math unit, in place."""
    for unit in iter_math_units(fragment):
        latex = unit.latex
        stripped = strip_math_delimiters(latex)
        # Repeat until stable so a second pass never strips further.
        while stripped != latex:
            latex = stripped
            stripped = strip_math_delimiters(latex)
        unit.latex = latex
    return fragment


def split_inline_math(text: str) -> list[Node]:
    """Split a text leaf into text and inline math nodes.

    Returns an empty list when ``text`` holds no complete ``$...$`` span.
    """
    pieces: list[Node] = []
    last_index = 0
    for match in _INLINE_MATH.finditer(text):
        start, end = match.span()
        if start > last_index:
            pieces.append(Text(text[last_index:start]))
        pieces.append(MathInline(latex=match.group(1), display=False, evaluate=False))
        last_index = end

    if not pieces:
        return []
    if last_index < len(text):
        pieces.append(Text(text[last_index:]))
    return pieces


def tokenize_fragment(fragment: Fragment) -> Fragment:
    """Run the normalize and tokenize passes over a parsed fragment, in place."""
    normalize_math_units(fragment)

    replacements = []
    for node, parent in iter_preorder(fragment):
        if node.kind is not NodeKind.TEXT or parent is None or is_math_unit(parent):
            continue
        if parent.kind is NodeKind.ELEMENT and parent.tag in RAW_TEXT_ELEMENTS:
            continue
        pieces = split_inline_math(node.text)
        if pieces:
            replacements.append((node, parent, pieces))

    # Splice after the walk so the traversal never sees its own output.
    for node, parent, pieces in replacements:
        index = next(i for i, child in enumerate(parent.children) if child is node)
        parent.children[index : index + 1] = pieces

    return fragment


def tokenize(markup: str | None) -> str:
    """Return ``markup`` with inline ``$...$`` spans turned into math units.

    Running the tokenizer on its own output returns the same markup.
    """
    if not markup:
        return ""
    return serialize(tokenize_fragment(parse_fragment(markup)))


class MathTokenizer:
    """Callable wrapper used by editing surfaces that inject a tokenizer."""

    def __call__(self, markup: str | None) -> str:
        return tokenize(markup)

    def tokenize(self, markup: str | None) -> str:
        return tokenize(markup)

    def tokenize_fragment(self, fragment: Fragment) -> Fragment:
        return tokenize_fragment(fragment)


__all__ = [
    "MathTokenizer",
    "normalize_math_units",
    "split_inline_math",
    "strip_math_delimiters",
    "tokenize",
    "tokenize_fragment",
]
