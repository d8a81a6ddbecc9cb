"""Math typesetting with a graceful literal fallback."""

from __future__ import annotations

from collections.abc import Callable, Mapping
import html
import logging
from typing import Any, TypeAlias

from latex2mathml.converter import convert as latex_to_mathml

from .content.nodes import MathUnit
from .core.diagnostics import DiagnosticEmitter, LoggingEmitter


logger = logging.getLogger(__name__)

MathEngine: TypeAlias = Callable[[str, bool, Mapping[str, Any]], str]

# Fallback styling for renderers without native MathML layout.
MATH_STYLESHEET_URL = "https://fred-wang.github.io/mathml.css/mathml.css"


def mathml_engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
    """Typeset ``expression`` into MathML using :mod:`latex2mathml`."""
    return latex_to_mathml(
        expression,
        display="block" if display_mode else "inline",
        **dict(options),
    )


class MathTypesetter:
    """Wrap a math engine so that a failing expression never breaks a document."""

    def __init__(
        self,
        engine: MathEngine | None = None,
        *,
        options: Mapping[str, Any] | None = None,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.engine = engine or mathml_engine
        self.options = dict(options or {})
        self.emitter = emitter or LoggingEmitter(logger_obj=logger)

    def try_render(self, expression: str, display_mode: bool = False) -> str | None:
        """Return rendered markup, or ``None`` after warning about a failure."""
        if not expression:
            return None
        try:
            return self.engine(expression, display_mode, self.options)
        except Exception as exc:  # noqa: BLE001 - engine failures stay local
            self.emitter.warning(f"Failed to typeset math expression '{expression}': {exc}")
            return None

    def render(self, expression: str, display_mode: bool = False) -> str:
        """Return rendered markup, falling back to the literal expression."""
        rendered = self.try_render(expression, display_mode)
        return expression if rendered is None else rendered

    def render_unit_markup(self, unit: MathUnit) -> str:
        """Return HTML-safe inner markup for a content-tree math unit."""
        rendered = self.try_render(unit.latex, unit.display)
        return html.escape(unit.latex, quote=False) if rendered is None else rendered

    def with_emitter(self, emitter: DiagnosticEmitter) -> MathTypesetter:
        """Return a copy of this typesetter reporting to ``emitter``."""
        return MathTypesetter(self.engine, options=self.options, emitter=emitter)


__all__ = ["MATH_STYLESHEET_URL", "MathEngine", "MathTypesetter", "mathml_engine"]
