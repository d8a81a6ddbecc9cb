"""Cooperative cancellation for long-running export calls."""

from __future__ import annotations

from threading import Event

from .exceptions import ExportCancelledError


class CancellationToken:
    """Flag shared between the caller and an in-flight export.

    The export checks the token before submitting the request and between
    chunks of the response body, so a cancellation requested from another
    thread (or a signal handler) stops the download at the next check.
    """

    def __init__(self) -> None:
        self._event = Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise ExportCancelledError("Export cancelled before the document was received.")


__all__ = ["CancellationToken"]
