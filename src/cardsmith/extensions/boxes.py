"""Fenced ``box`` blocks rendered as boxed asides.

Registered as a ``pymdownx.superfences`` custom fence::

    ```box
    First paragraph
    continues here.

    Second paragraph.
    ```

The fence body is treated as literal text: it is escaped, split into
paragraphs on blank lines and single newlines become ``<br>``.
"""

from __future__ import annotations

import html
import re
from typing import Any


BOX_FENCE_NAME = "box"
BOX_CLASS = "flashcard-box"

_BLANK_LINE = re.compile(r"\n[ \t]*\n")


def render_box(source: str, *, css_class: str = BOX_CLASS) -> str:
    """Return the aside markup for the literal text of a ``box`` fence."""
    paragraphs = [chunk for chunk in _BLANK_LINE.split(source.strip("\n")) if chunk.strip()]
    body = "".join(
        "<p>{}</p>".format("<br>".join(html.escape(line, quote=True) for line in chunk.split("\n")))
        for chunk in paragraphs
    )
    return f'<aside class="{html.escape(css_class, quote=True)}">{body}</aside>'


def fence_box_format(
    source: str,
    language: str,
    css_class: str,
    options: dict[str, Any],
    md: Any,
    **kwargs: Any,
) -> str:
    """Superfences formatter hook for ``box`` fences."""
    _ = (language, options, md, kwargs)
    return render_box(source, css_class=css_class or BOX_CLASS)


BOX_CUSTOM_FENCE: dict[str, Any] = {
    "name": BOX_FENCE_NAME,
    "class": BOX_CLASS,
    "format": fence_box_format,
}


__all__ = ["BOX_CLASS", "BOX_CUSTOM_FENCE", "BOX_FENCE_NAME", "fence_box_format", "render_box"]
