"""Primary public API for cardsmith."""

from __future__ import annotations

from cardsmith.content import MathTokenizer, normalize_math_units, parse_fragment, serialize, tokenize
from cardsmith.core import (
    CancellationToken,
    CardsmithError,
    Collection,
    CollectionBundle,
    ConfigurationError,
    ExportCancelledError,
    Flashcard,
    RenderServiceConfig,
    RenderServiceError,
)
from cardsmith.export import (
    ExportAssembler,
    PageDescription,
    RenderServiceClient,
    ResolvedTheme,
    export_collection,
    pdf_filename,
    resolve_theme,
)
from cardsmith.markdown import ConversionResult, MarkdownConverter, markdown_to_html
from cardsmith.theme import (
    FontLoadCache,
    ensure_font_loaded,
    hex_to_rgba,
    is_system_font,
    normalize_hex_color,
    resolve_css_stack,
)
from cardsmith.typesetting import MathTypesetter
from cardsmith.version import get_version


__version__ = get_version()

__all__ = [
    "CancellationToken",
    "CardsmithError",
    "Collection",
    "CollectionBundle",
    "ConfigurationError",
    "ConversionResult",
    "ExportAssembler",
    "ExportCancelledError",
    "Flashcard",
    "FontLoadCache",
    "MarkdownConverter",
    "MathTokenizer",
    "MathTypesetter",
    "PageDescription",
    "RenderServiceClient",
    "RenderServiceConfig",
    "RenderServiceError",
    "ResolvedTheme",
    "__version__",
    "ensure_font_loaded",
    "get_version",
    "export_collection",
    "hex_to_rgba",
    "is_system_font",
    "markdown_to_html",
    "normalize_hex_color",
    "normalize_math_units",
    "parse_fragment",
    "pdf_filename",
    "resolve_css_stack",
    "resolve_theme",
    "serialize",
    "tokenize",
]
