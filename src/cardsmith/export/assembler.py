"""Assemble a themed, page-per-side document description for a collection."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ..content.nodes import parse_fragment, serialize
from ..content.tokenizer import normalize_math_units
from ..core.config import RenderServiceConfig
from ..core.diagnostics import Diagnostic, DiagnosticCollector, DiagnosticEmitter
from ..core.models import Collection, Flashcard
from ..theme.colors import DEFAULT_HEADER_COLOR, hex_to_rgba, normalize_hex_color
from ..theme.fonts import FontLoadCache, ensure_font_loaded, is_system_font, resolve_css_stack
from ..typesetting import MATH_STYLESHEET_URL, MathTypesetter
from ..utils import format_decimal


logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent / "partials"

DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_FONT_COLOR = "#1f2933"
DEFAULT_HEADER_FONT_COLOR = "#ffffff"
DEFAULT_FONT_FAMILY = "Arial"
DEFAULT_CARD_SIZE_MM = (89.0, 51.0)

BOX_TINT_ALPHA = 0.08
BOX_TINT_STRONG_ALPHA = 0.16

SIDES = ("front", "back")


@dataclass(frozen=True, slots=True)
class ResolvedTheme:
    """Concrete CSS values derived from a collection's theme attributes."""

    header_color: str
    background_color: str
    font_color: str
    header_font_color: str
    header_text: str | None
    font_family: str
    font_stack: str
    remote_font: bool
    box_tint: str
    box_tint_strong: str

    def css_variables(self) -> dict[str, str]:
        return {
            "--card-header-color": self.header_color,
            "--card-header-font-color": self.header_font_color,
            "--card-background": self.background_color,
            "--card-font-color": self.font_color,
            "--card-font-family": self.font_stack,
            "--card-box-tint": self.box_tint,
            "--card-box-tint-strong": self.box_tint_strong,
        }

    def inline_style(self) -> str:
        return "; ".join(f"{name}: {value}" for name, value in self.css_variables().items())


@dataclass(slots=True)
class PageDescription:
    """Renderer-agnostic description of the document to produce."""

    pages: list[str]
    head_html: str
    page_size: tuple[float, float] | None = None
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body submitted to the rendering service."""
        payload: dict[str, Any] = {"pages": list(self.pages), "headHtml": self.head_html}
        if self.page_size is not None:
            payload["pageSize"] = [self.page_size[0], self.page_size[1]]
        return payload


def resolve_theme(collection: Collection) -> ResolvedTheme:
    """Normalise a collection's colours and font into concrete CSS values."""
    header_color = normalize_hex_color(collection.header_color, DEFAULT_HEADER_COLOR)
    family = collection.font_family or DEFAULT_FONT_FAMILY
    return ResolvedTheme(
        header_color=header_color,
        background_color=normalize_hex_color(collection.background_color, DEFAULT_BACKGROUND_COLOR),
        font_color=normalize_hex_color(collection.font_color, DEFAULT_FONT_COLOR),
        header_font_color=normalize_hex_color(
            collection.header_font_color, DEFAULT_HEADER_FONT_COLOR
        ),
        header_text=collection.header_text_left,
        font_family=family,
        font_stack=resolve_css_stack(family),
        remote_font=not is_system_font(family),
        box_tint=hex_to_rgba(header_color, BOX_TINT_ALPHA),
        box_tint_strong=hex_to_rgba(header_color, BOX_TINT_STRONG_ALPHA),
    )


def resolve_page_size(
    collection: Collection,
    width_mm: float | None = None,
    height_mm: float | None = None,
) -> tuple[float, float]:
    """Return the card size in millimetres, preferring the caller's request."""
    width = width_mm or collection.width_mm or DEFAULT_CARD_SIZE_MM[0]
    height = height_mm or collection.height_mm or DEFAULT_CARD_SIZE_MM[1]
    return float(width), float(height)


class ExportAssembler:
    """Turn a collection and its flashcards into a :class:`PageDescription`."""

    def __init__(
        self,
        typesetter: MathTypesetter | None = None,
        *,
        font_cache: FontLoadCache | None = None,
        math_stylesheet: str | None = MATH_STYLESHEET_URL,
        template_dir: Path = TEMPLATE_DIR,
    ) -> None:
        self.typesetter = typesetter or MathTypesetter()
        self.font_cache = font_cache if font_cache is not None else FontLoadCache()
        self.math_stylesheet = math_stylesheet
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            keep_trailing_newline=False,
        )
        self._content_css = (template_dir / "card_content.css").read_text(encoding="utf-8")

    @classmethod
    def from_config(
        cls,
        config: RenderServiceConfig,
        typesetter: MathTypesetter | None = None,
        *,
        font_cache: FontLoadCache | None = None,
    ) -> ExportAssembler:
        """Build an assembler linking the math stylesheet chosen by ``config``.

        ``None`` keeps the default stylesheet and an empty string drops the link.
        """
        stylesheet = config.math_stylesheet
        return cls(
            typesetter,
            font_cache=font_cache,
            math_stylesheet=MATH_STYLESHEET_URL if stylesheet is None else stylesheet or None,
        )

    def assemble(
        self,
        collection: Collection,
        flashcards: Sequence[Flashcard],
        *,
        width_mm: float | None = None,
        height_mm: float | None = None,
    ) -> PageDescription:
        """Build two pages per flashcard, front then back, in collection order."""
        collector = DiagnosticCollector(self.typesetter.emitter)
        typesetter = self.typesetter.with_emitter(collector)

        theme = resolve_theme(collection)
        page_size = resolve_page_size(collection, width_mm, height_mm)
        head_html = self.build_head_html(theme, page_size, emitter=collector)

        total = len(flashcards) * len(SIDES)
        pages: list[str] = []
        for card in flashcards:
            for side in SIDES:
                last = len(pages) == total - 1
                pages.append(self.build_page_html(card, side, theme, typesetter, last=last))

        logger.debug(
            "Assembled %d pages for collection '%s' (%s x %s mm)",
            len(pages),
            collection.title,
            format_decimal(page_size[0]),
            format_decimal(page_size[1]),
        )
        return PageDescription(
            pages=pages,
            head_html=head_html,
            page_size=page_size,
            diagnostics=list(collector.diagnostics),
        )

    def build_head_html(
        self,
        theme: ResolvedTheme,
        page_size: tuple[float, float],
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> str:
        font_stylesheets: list[str] = []
        if theme.remote_font:
            first_request = theme.font_family not in self.font_cache
            url = ensure_font_loaded(theme.font_family, self.font_cache)
            if url:
                font_stylesheets.append(url)
                if first_request and emitter is not None:
                    emitter.event("font_loaded", {"family": theme.font_family, "url": url})

        template = self.env.get_template("head.html")
        return template.render(
            math_stylesheet=self.math_stylesheet,
            font_stylesheets=font_stylesheets,
            width=format_decimal(page_size[0]),
            height=format_decimal(page_size[1]),
            content_css=self._content_css,
        )

    def build_page_html(
        self,
        card: Flashcard,
        side: str,
        theme: ResolvedTheme,
        typesetter: MathTypesetter | None = None,
        *,
        last: bool = False,
    ) -> str:
        content = self.render_content(card.side(side), typesetter or self.typesetter)
        template = self.env.get_template("page.html")
        return template.render(
            side=side,
            info_card=card.is_info_card,
            last=last,
            style=theme.inline_style(),
            header_left=theme.header_text,
            header_right=card.header_right if side == "front" else None,
            content=content,
        )

    def render_content(self, markup: str, typesetter: MathTypesetter | None = None) -> str:
        """Re-render stored markup with every math unit typeset."""
        active = typesetter or self.typesetter
        fragment = parse_fragment(markup)
        normalize_math_units(fragment)
        return serialize(fragment, math=active.render_unit_markup)


__all__ = [
    "BOX_TINT_ALPHA",
    "BOX_TINT_STRONG_ALPHA",
    "DEFAULT_CARD_SIZE_MM",
    "ExportAssembler",
    "PageDescription",
    "ResolvedTheme",
    "resolve_page_size",
    "resolve_theme",
]
