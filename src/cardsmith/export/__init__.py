"""Export flashcard collections to paginated documents."""

from __future__ import annotations

from .assembler import (
    DEFAULT_CARD_SIZE_MM,
    ExportAssembler,
    PageDescription,
    ResolvedTheme,
    resolve_page_size,
    resolve_theme,
)
from .client import RenderServiceClient
from .service import export_collection, pdf_filename


__all__ = [
    "DEFAULT_CARD_SIZE_MM",
    "ExportAssembler",
    "PageDescription",
    "RenderServiceClient",
    "ResolvedTheme",
    "export_collection",
    "pdf_filename",
    "resolve_page_size",
    "resolve_theme",
]
