"""Custom exception hierarchy for the flashcard content pipeline."""

from __future__ import annotations


class CardsmithError(RuntimeError):
    """Base exception for failures surfaced to callers."""


class ConfigurationError(CardsmithError):
    """Raised when a required setting is missing before any I/O happens."""


class RenderServiceError(CardsmithError):
    """Raised when the external rendering service cannot produce a document."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ExportCancelledError(CardsmithError):
    """Raised when an export is cancelled through its cancellation token."""


class BundleLoadError(CardsmithError):
    """Raised when a collection bundle file cannot be read or validated."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


__all__ = [
    "BundleLoadError",
    "CardsmithError",
    "ConfigurationError",
    "ExportCancelledError",
    "RenderServiceError",
    "exception_messages",
]
