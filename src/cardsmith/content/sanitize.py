"""Strip active content from converted markup."""

from __future__ import annotations

import html
import re

from bs4 import BeautifulSoup
from bs4.element import Tag
from bs4.formatter import HTMLFormatter

from ..core.diagnostics import DiagnosticEmitter, NullEmitter


DISALLOWED_TAGS = (
    "script",
    "style",
    "iframe",
    "object",
    "embed",
    "link",
    "meta",
    "base",
    "form",
)
URL_ATTRIBUTES = frozenset({"href", "src", "action", "formaction", "xlink:href"})

_SCRIPT_URL = re.compile(r"^\s*(?:javascript|vbscript|data:text/html)", re.IGNORECASE)


def _escape(text: str) -> str:
    return html.escape(text, quote=True)


# Quotes stay entity-encoded and void elements keep their HTML form (`<br>`).
OUTPUT_FORMATTER = HTMLFormatter(entity_substitution=_escape, void_element_close_prefix=None)


def sanitize_html(markup: str, *, emitter: DiagnosticEmitter | None = None) -> str:
    """Remove scripts, embedded documents and event handlers from ``markup``.

    Every removal is reported to ``emitter`` as a warning.
    """
    if not markup:
        return ""
    reporter = emitter or NullEmitter()
    soup = BeautifulSoup(markup, "html.parser")

    for tag in soup.find_all(list(DISALLOWED_TAGS)):
        if tag.decomposed:
            continue
        reporter.warning(f"Removed <{tag.name}> element from converted markup.")
        tag.decompose()

    for tag in soup.find_all(True):
        _strip_attributes(tag, reporter)

    return soup.decode(formatter=OUTPUT_FORMATTER)


def _strip_attributes(tag: Tag, reporter: DiagnosticEmitter) -> None:
    for name in list(tag.attrs):
        lowered = name.lower()
        if lowered.startswith("on"):
            reporter.warning(f"Removed event handler '{name}' from <{tag.name}>.")
            del tag[name]
            continue
        value = tag.attrs[name]
        if lowered in URL_ATTRIBUTES and isinstance(value, str) and _SCRIPT_URL.match(value):
            reporter.warning(f"Removed script URL from '{name}' on <{tag.name}>.")
            del tag[name]


__all__ = ["DISALLOWED_TAGS", "OUTPUT_FORMATTER", "sanitize_html"]
