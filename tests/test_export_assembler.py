from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import pytest

from cardsmith.core.config import RenderServiceConfig
from cardsmith.core.diagnostics import NullEmitter
from cardsmith.core.models import Collection, Flashcard
from cardsmith.export import ExportAssembler, PageDescription, resolve_page_size, resolve_theme
from cardsmith.theme.fonts import FontLoadCache
from cardsmith.typesetting import MATH_STYLESHEET_URL, MathTypesetter


def _engine(expression: str, display_mode: bool, options: Mapping[str, Any]) -> str:
    if expression == "bad":
        raise ValueError("unsupported command")
    return f"<math>{expression}</math>"


def _cards(count: int) -> list[Flashcard]:
    return [
        Flashcard(id=index, front=f"<p>Front {index}</p>", back=f"<p>Back {index}</p>")
        for index in range(1, count + 1)
    ]


@pytest.fixture
def assembler() -> ExportAssembler:
    return ExportAssembler(MathTypesetter(_engine, emitter=NullEmitter()))


def test_two_pages_per_card_in_collection_order(assembler: ExportAssembler) -> None:
    description = assembler.assemble(Collection(title="Physics"), _cards(3))

    assert len(description.pages) == 6
    expected = ["Front 1", "Back 1", "Front 2", "Back 2", "Front 3", "Back 3"]
    for page, text in zip(description.pages, expected, strict=True):
        assert text in page
    assert all("flashcard-page--front" in page for page in description.pages[::2])
    assert all("flashcard-page--back" in page for page in description.pages[1::2])


def test_only_last_page_drops_page_break(assembler: ExportAssembler) -> None:
    pages = assembler.assemble(Collection(), _cards(2)).pages

    assert [("flashcard-page--last" in page) for page in pages] == [False, False, False, True]


def test_zero_cards_produce_empty_document(assembler: ExportAssembler) -> None:
    description = assembler.assemble(Collection(), [])

    assert description.pages == []
    assert description.to_payload()["pages"] == []
    assert description.head_html


def test_theme_is_stamped_on_every_page(assembler: ExportAssembler) -> None:
    collection = Collection(header_color="0a0", header_text_left="Chemistry")

    page = assembler.assemble(collection, _cards(1)).pages[0]

    assert "--card-header-color: #00aa00" in page
    assert "--card-background: #ffffff" in page
    assert "--card-box-tint: rgba(0, 170, 0, 0.08)" in page
    assert "--card-box-tint-strong: rgba(0, 170, 0, 0.16)" in page
    assert '<span class="flashcard-header__left">Chemistry</span>' in page


def test_right_header_only_on_front(assembler: ExportAssembler) -> None:
    card = Flashcard(front="<p>Q</p>", back="<p>A</p>", header_right="Ch. 4")

    front, back = assembler.assemble(Collection(header_text_left="Bio"), [card]).pages

    assert "Ch. 4" in front
    assert "flashcard-header__right" in front
    assert "Ch. 4" not in back
    assert "flashcard-header__left" in back


def test_header_text_is_escaped(assembler: ExportAssembler) -> None:
    card = Flashcard(front="<p>Q</p>", header_right="<b>x</b>")

    front = assembler.assemble(Collection(), [card]).pages[0]

    assert "&lt;b&gt;x&lt;/b&gt;" in front


def test_info_cards_carry_modifier(assembler: ExportAssembler) -> None:
    card = Flashcard(front="<p>Read me</p>", is_info_card=True)

    front, back = assembler.assemble(Collection(), [card]).pages

    assert "flashcard-page--info" in front
    assert "flashcard-page--info" in back


def test_head_markup_links_math_and_remote_font(assembler: ExportAssembler) -> None:
    head = assembler.assemble(Collection(font_family="Roboto"), []).head_html

    assert MATH_STYLESHEET_URL in head
    assert "family=Roboto" in head
    assert "size: 89mm 51mm;" in head
    assert "page-break-after: always;" in head
    assert "box-sizing: border-box;" in head
    assert ".flashcard-box" in head


def test_head_markup_skips_system_font(assembler: ExportAssembler) -> None:
    head = assembler.assemble(Collection(font_family="Georgia"), []).head_html

    assert "fonts.googleapis.com" not in head


def test_font_cache_is_injected() -> None:
    cache = FontLoadCache()
    assembler = ExportAssembler(MathTypesetter(_engine), font_cache=cache)

    assembler.assemble(Collection(font_family="Lato"), [])
    assembler.assemble(Collection(font_family="Lato"), [])

    assert len(cache) == 1
    assert "Lato" in cache


class RecordingEmitter(NullEmitter):
    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def test_remote_font_is_reported_once_per_cache() -> None:
    emitter = RecordingEmitter()
    assembler = ExportAssembler(MathTypesetter(_engine, emitter=emitter))

    assembler.assemble(Collection(font_family="Lato"), [])
    assembler.assemble(Collection(font_family="Lato"), [])
    assembler.assemble(Collection(font_family="Georgia"), [])

    loaded = [payload for name, payload in emitter.events if name == "font_loaded"]
    assert len(loaded) == 1
    assert loaded[0]["family"] == "Lato"
    assert "fonts.googleapis.com" in loaded[0]["url"]


def test_page_size_prefers_caller_then_collection() -> None:
    collection = Collection(width_mm=63, height_mm=88)

    assert resolve_page_size(collection) == (63.0, 88.0)
    assert resolve_page_size(collection, 100, 70) == (100.0, 70.0)
    assert resolve_page_size(Collection()) == (89.0, 51.0)


def test_payload_matches_render_contract(assembler: ExportAssembler) -> None:
    payload = assembler.assemble(Collection(), _cards(1), width_mm=100, height_mm=70).to_payload()

    assert set(payload) == {"pages", "headHtml", "pageSize"}
    assert payload["pageSize"] == [100.0, 70.0]
    assert "size: 100mm 70mm;" in payload["headHtml"]


def test_payload_omits_missing_page_size() -> None:
    payload = PageDescription(pages=["<p>x</p>"], head_html="<style></style>").to_payload()

    assert payload == {"pages": ["<p>x</p>"], "headHtml": "<style></style>"}


def test_failing_expression_does_not_affect_siblings(assembler: ExportAssembler) -> None:
    card = Flashcard(
        front=(
            '<p><span data-type="inlineMath" data-latex="bad">$bad$</span> then '
            '<span data-type="inlineMath" data-latex="x^2">$x^2$</span></p>'
        ),
        back='<div data-type="blockMath" data-latex="$$y$$"></div>',
    )

    description = assembler.assemble(Collection(), [card])
    front, back = description.pages

    assert "<math>x^2</math>" in front
    assert 'data-latex="bad" data-evaluate="no" data-display="no">bad</span>' in front
    assert "<math>y</math>" in back
    assert [item.message for item in description.diagnostics] == [
        "Failed to typeset math expression 'bad': unsupported command"
    ]


def test_resolve_theme_defaults() -> None:
    theme = resolve_theme(Collection())

    assert theme.header_color == "#100e75"
    assert theme.font_color == "#1f2933"
    assert theme.header_font_color == "#ffffff"
    assert theme.font_stack == "Arial, Helvetica, sans-serif"
    assert theme.remote_font is False
    assert theme.header_text is None


@pytest.mark.parametrize(
    ("stylesheet", "expected"),
    [
        (None, MATH_STYLESHEET_URL),
        ("https://cdn.example/math.css", "https://cdn.example/math.css"),
        ("", None),
    ],
)
def test_assembler_from_config_picks_math_stylesheet(
    stylesheet: str | None, expected: str | None
) -> None:
    config = RenderServiceConfig(math_stylesheet=stylesheet)
    assembler = ExportAssembler.from_config(config, MathTypesetter(_engine))

    assert assembler.math_stylesheet == expected
    head = assembler.assemble(Collection(font_family="Georgia"), []).head_html
    assert ("<link" in head) is (expected is not None)
