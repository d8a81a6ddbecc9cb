"""Diagnostic abstractions shared across the conversion pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
import logging
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class DiagnosticEmitter(Protocol):
    """Interface used to surface warnings, errors, and structured events."""

    debug_enabled: bool

    def warning(self, message: str, exc: BaseException | None = None) -> None: ...

    def error(self, message: str, exc: BaseException | None = None) -> None: ...

    def event(self, name: str, payload: Mapping[str, Any]) -> None: ...


class NullEmitter:
    """Emitter that ignores every diagnostic."""

    debug_enabled: bool = False

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        return

    def error(self, message: str, exc: BaseException | None = None) -> None:
        return

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        return


class LoggingEmitter:
    """Emitter that forwards diagnostics to the standard logging module."""

    def __init__(
        self, *, logger_obj: logging.Logger | None = None, debug_enabled: bool = False
    ) -> None:
        self._logger = logger_obj or logger
        self.debug_enabled = debug_enabled

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.warning(message, exc_info=exc)
        else:
            self._logger.warning(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        if exc is not None:
            self._logger.error(message, exc_info=exc)
        else:
            self._logger.error(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        message = format_event_message(name, payload)
        if message:
            self._logger.info(message)
            return
        self._logger.debug("diagnostic event %s: %s", name, dict(payload))


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A non-fatal finding recorded while converting content."""

    level: str
    message: str


class DiagnosticCollector:
    """Record warnings and errors while forwarding them to another emitter."""

    def __init__(self, forward: DiagnosticEmitter | None = None) -> None:
        self._forward = forward or LoggingEmitter()
        self.debug_enabled = self._forward.debug_enabled
        self.diagnostics: list[Diagnostic] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.diagnostics.append(Diagnostic("warning", message))
        self._forward.warning(message, exc)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.diagnostics.append(Diagnostic("error", message))
        self._forward.error(message, exc)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self._forward.event(name, payload)


def format_event_message(name: str, payload: Mapping[str, Any]) -> str | None:
    """Return a human-friendly summary for selected diagnostic events."""
    data = dict(payload)

    if name == "font_loaded":
        family = data.get("family") or "<unknown>"
        return f"Loading remote font stylesheet: {family}"

    if name == "render_request":
        url = data.get("url") or "<unknown>"
        pages = data.get("pages")
        suffix = f" ({pages} pages)" if pages is not None else ""
        return f"Submitting document to {url}{suffix}"

    return None


__all__ = [
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticEmitter",
    "LoggingEmitter",
    "NullEmitter",
    "format_event_message",
]
