"""CLI command implementations."""

from __future__ import annotations

from .convert import convert, tokenize
from .export import export
from .fonts import fonts


__all__ = ["convert", "export", "fonts", "tokenize"]
