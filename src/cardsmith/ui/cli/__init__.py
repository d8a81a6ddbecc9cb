"""Public CLI exports for cardsmith."""

from __future__ import annotations

from cardsmith.markdown import DEFAULT_MARKDOWN_EXTENSIONS

from .app import app, main
from .commands import convert, export, fonts, tokenize
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "app",
    "convert",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "export",
    "fonts",
    "get_cli_state",
    "main",
    "tokenize",
]
