"""Markdown conversion for flashcard authoring."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
import html
import logging
from threading import Lock
from typing import Any

import markdown

from ..content.sanitize import sanitize_html
from ..core.diagnostics import Diagnostic, DiagnosticCollector
from ..extensions.boxes import BOX_CUSTOM_FENCE
from ..typesetting import MathTypesetter


__all__ = [
    "DEFAULT_EXTENSION_CONFIGS",
    "DEFAULT_MARKDOWN_EXTENSIONS",
    "ConversionResult",
    "MarkdownConverter",
    "convert_markdown",
    "deduplicate_markdown_extensions",
    "markdown_to_html",
]


logger = logging.getLogger(__name__)


DEFAULT_MARKDOWN_EXTENSIONS = [
    "pymdownx.superfences",
    "pymdownx.betterem",
    "sane_lists",
    "cardsmith.extensions.math:MathExtension",
]


DEFAULT_EXTENSION_CONFIGS: dict[str, dict[str, object]] = {
    "pymdownx.superfences": {
        "custom_fences": [BOX_CUSTOM_FENCE],
    },
}


@dataclass(slots=True)
class ConversionResult:
    """Converted markup together with the non-fatal findings of the run."""

    html: str
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [item.message for item in self.diagnostics if item.level == "warning"]


def deduplicate_markdown_extensions(values: Iterable[str]) -> list[str]:
    """Remove duplicate extensions while preserving order and case."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if not isinstance(value, str):
            continue
        key = value.lower()
        if key in seen:
            continue
        seen.add(key)
        result.append(value)
    return result


class MarkdownConverter:
    """Convert author-typed Markdown into sanitized flashcard markup.

    A converter owns one Markdown processor. Conversions are serialized with a
    lock and the processor is reset between runs, so a converter can be shared
    across threads.
    """

    def __init__(
        self,
        typesetter: MathTypesetter | None = None,
        *,
        extensions: Sequence[str] | None = None,
        sanitize: bool = True,
    ) -> None:
        self.typesetter = typesetter or MathTypesetter()
        self.extensions = deduplicate_markdown_extensions(
            DEFAULT_MARKDOWN_EXTENSIONS if extensions is None else extensions
        )
        self.sanitize = sanitize
        self._lock = Lock()
        self._processor: Any = None

    def convert(self, source: str | None) -> ConversionResult:
        """Convert ``source``; empty input returns empty markup immediately."""
        if not source:
            return ConversionResult(html="")

        collector = DiagnosticCollector(self.typesetter.emitter)
        with self._lock:
            processor = self._ensure_processor()
            processor.reset()
            processor.cardsmith_typesetter = self.typesetter.with_emitter(collector)
            try:
                rendered = processor.convert(source)
            except Exception as exc:  # noqa: BLE001 - library-controlled, degrade to text
                collector.error(f"Failed to convert Markdown source: {exc}", exc)
                rendered = f"<p>{html.escape(source, quote=False)}</p>"
            finally:
                processor.cardsmith_typesetter = None

        if self.sanitize:
            rendered = sanitize_html(rendered, emitter=collector)
        return ConversionResult(html=rendered, diagnostics=list(collector.diagnostics))

    def _ensure_processor(self) -> Any:
        if self._processor is None:
            extension_configs = {
                name: dict(DEFAULT_EXTENSION_CONFIGS[name])
                for name in self.extensions
                if name in DEFAULT_EXTENSION_CONFIGS
            }
            self._processor = markdown.Markdown(
                extensions=self.extensions,
                extension_configs=extension_configs,
            )
        return self._processor


_DEFAULT_CONVERTER: MarkdownConverter | None = None
_DEFAULT_CONVERTER_GUARD = Lock()


def _default_converter() -> MarkdownConverter:
    global _DEFAULT_CONVERTER
    if _DEFAULT_CONVERTER is None:
        with _DEFAULT_CONVERTER_GUARD:
            if _DEFAULT_CONVERTER is None:
                _DEFAULT_CONVERTER = MarkdownConverter()
    return _DEFAULT_CONVERTER


def convert_markdown(source: str | None) -> ConversionResult:
    """Convert ``source`` with the shared default converter."""
    return _default_converter().convert(source)


def markdown_to_html(source: str | None) -> str:
    """Return sanitized markup for ``source``, dropping the diagnostics."""
    return convert_markdown(source).html
