"""Colour and font resolution for exported pages."""

from __future__ import annotations

from .colors import DEFAULT_HEADER_COLOR, hex_to_rgba, normalize_hex_color
from .fonts import (
    DEFAULT_FONT_STACK,
    FONT_CATALOG,
    FontLoadCache,
    FontSpec,
    ensure_font_loaded,
    font_stylesheet_url,
    is_system_font,
    resolve_css_stack,
)


__all__ = [
    "DEFAULT_FONT_STACK",
    "DEFAULT_HEADER_COLOR",
    "FONT_CATALOG",
    "FontLoadCache",
    "FontSpec",
    "ensure_font_loaded",
    "font_stylesheet_url",
    "hex_to_rgba",
    "is_system_font",
    "normalize_hex_color",
    "resolve_css_stack",
]
