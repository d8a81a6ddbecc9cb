"""Core records, configuration, diagnostics and errors."""

from __future__ import annotations

from .cancellation import CancellationToken
from .config import RenderServiceConfig
from .diagnostics import (
    Diagnostic,
    DiagnosticCollector,
    DiagnosticEmitter,
    LoggingEmitter,
    NullEmitter,
)
from .exceptions import (
    BundleLoadError,
    CardsmithError,
    ConfigurationError,
    ExportCancelledError,
    RenderServiceError,
)
from .models import Collection, CollectionBundle, Flashcard


__all__ = [
    "BundleLoadError",
    "CancellationToken",
    "CardsmithError",
    "Collection",
    "CollectionBundle",
    "ConfigurationError",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticEmitter",
    "ExportCancelledError",
    "Flashcard",
    "LoggingEmitter",
    "NullEmitter",
    "RenderServiceConfig",
    "RenderServiceError",
]
