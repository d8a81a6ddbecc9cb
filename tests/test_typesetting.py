from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

import pytest

from cardsmith.content.nodes import MathBlock, MathInline
from cardsmith.core.diagnostics import DiagnosticCollector, NullEmitter
from cardsmith.typesetting import MathTypesetter, mathml_engine


def _failing_engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
    raise ValueError(f"cannot parse {expression}")


def test_default_engine_produces_mathml() -> None:
    markup = MathTypesetter().render("x^2")

    assert markup.startswith("<math")
    assert "<msup>" in markup
    assert 'display="inline"' in markup


def test_display_mode_is_forwarded_to_engine() -> None:
    assert 'display="block"' in mathml_engine("x^2", True, {})


def test_render_falls_back_to_literal_expression(caplog: pytest.LogCaptureFixture) -> None:
    typesetter = MathTypesetter(_failing_engine)

    with caplog.at_level(logging.WARNING):
        result = typesetter.render(r"\frac{1}{", display_mode=True)

    assert result == r"\frac{1}{"
    assert any("Failed to typeset" in record.message for record in caplog.records)


def test_try_render_reports_to_emitter() -> None:
    collector = DiagnosticCollector(NullEmitter())
    typesetter = MathTypesetter(_failing_engine, emitter=collector)

    assert typesetter.try_render("x") is None
    assert len(collector.diagnostics) == 1
    assert collector.diagnostics[0].level == "warning"


def test_empty_expression_skips_engine() -> None:
    calls: list[str] = []

    def engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
        calls.append(expression)
        return "<math/>"

    assert MathTypesetter(engine).render("") == ""
    assert calls == []


def test_options_reach_engine() -> None:
    seen: dict[str, Any] = {}

    def engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
        seen.update(options)
        return expression

    MathTypesetter(engine, options={"macros": {"R": "mathbb{R}"}}).render("R")

    assert seen == {"macros": {"R": "mathbb{R}"}}


def test_render_unit_markup_escapes_failed_expression() -> None:
    typesetter = MathTypesetter(_failing_engine, emitter=NullEmitter())

    assert typesetter.render_unit_markup(MathInline(latex="a<b")) == "a&lt;b"


def test_render_unit_markup_uses_display_mode_for_blocks() -> None:
    modes: list[bool] = []

    def engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
        modes.append(display_mode)
        return "<math/>"

    typesetter = MathTypesetter(engine)
    typesetter.render_unit_markup(MathBlock(latex="y"))
    typesetter.render_unit_markup(MathInline(latex="y"))

    assert modes == [True, False]


def test_with_emitter_keeps_engine_and_options() -> None:
    typesetter = MathTypesetter(_failing_engine, options={"a": 1})
    collector = DiagnosticCollector(NullEmitter())

    clone = typesetter.with_emitter(collector)

    assert clone.engine is typesetter.engine
    assert clone.options == {"a": 1}
    assert clone.emitter is collector
