"""Hex colour normalisation used when stamping exported pages."""

from __future__ import annotations

import re


DEFAULT_HEADER_COLOR = "#100e75"

_SHORT_HEX = re.compile(r"^#([0-9a-fA-F]{3})$")
_FULL_HEX = re.compile(r"^#[0-9a-fA-F]{6}$")


def normalize_hex_color(color: str | None = None, fallback: str = DEFAULT_HEADER_COLOR) -> str:
    """Return ``color`` as a ``#rrggbb`` string, or ``fallback`` when invalid.

    The leading ``#`` is optional and three digit shorthands are expanded, so
    ``"fff"`` becomes ``"#ffffff"``. Anything else falls back.
    """
    if not color or not isinstance(color, str):
        return fallback

    normalized = color.strip()
    if not normalized.startswith("#"):
        normalized = f"#{normalized}"

    short = _SHORT_HEX.match(normalized)
    if short:
        red, green, blue = short.group(1)
        normalized = f"#{red}{red}{green}{green}{blue}{blue}"

    return normalized if _FULL_HEX.match(normalized) else fallback


def _format_alpha(value: float) -> str:
    return str(int(value)) if value.is_integer() else repr(value)


def hex_to_rgba(color: str | None, alpha: float) -> str:
    """Convert a hex colour to an ``rgba(r, g, b, a)`` CSS string."""
    normalized = normalize_hex_color(color)
    safe_alpha = min(1.0, max(0.0, float(alpha)))

    red = int(normalized[1:3], 16)
    green = int(normalized[3:5], 16)
    blue = int(normalized[5:7], 16)

    return f"rgba({red}, {green}, {blue}, {_format_alpha(safe_alpha)})"


__all__ = ["DEFAULT_HEADER_COLOR", "hex_to_rgba", "normalize_hex_color"]
