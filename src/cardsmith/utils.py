"""Small formatting helpers shared across modules."""

from __future__ import annotations


def format_decimal(value: float, *, precision: int = 4) -> str:
    """Format ``value`` without trailing zeros (``1.0`` -> ``"1"``)."""
    formatted = f"{value:.{precision}f}"
    trimmed = formatted.rstrip("0").rstrip(".")
    return "0" if trimmed in {"", "-0"} else trimmed


__all__ = ["format_decimal"]
