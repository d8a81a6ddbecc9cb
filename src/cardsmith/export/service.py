"""End-to-end export of a collection to a rendered document."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from typing import TYPE_CHECKING

from slugify import slugify

from ..core.cancellation import CancellationToken
from ..core.config import RenderServiceConfig
from ..core.models import Collection, Flashcard
from .assembler import ExportAssembler
from .client import RenderServiceClient


if TYPE_CHECKING:  # pragma: no cover - typing only
    from requests import Session


logger = logging.getLogger(__name__)


def pdf_filename(title: str | None) -> str:
    """Return a download filename such as ``biology-101-flashcards.pdf``."""
    slug = slugify(title or "", separator="-")
    return f"{slug}-flashcards.pdf" if slug else "flashcards.pdf"


def export_collection(
    collection: Collection,
    flashcards: Sequence[Flashcard],
    *,
    config: RenderServiceConfig | None = None,
    width_mm: float | None = None,
    height_mm: float | None = None,
    cancel_token: CancellationToken | None = None,
    session: Session | None = None,
    assembler: ExportAssembler | None = None,
) -> bytes:
    """Assemble ``collection`` and return the document produced by the service.

    The rendering service address is validated before any work is done, so a
    missing configuration never reaches the network.
    """
    settings = config if config is not None else RenderServiceConfig.from_env()
    settings.require_base_url()

    if assembler is None:
        assembler = ExportAssembler.from_config(settings)
    description = assembler.assemble(
        collection, flashcards, width_mm=width_mm, height_mm=height_mm
    )
    logger.info(
        "Exporting '%s': %d flashcards, %d pages",
        collection.title,
        len(flashcards),
        len(description.pages),
    )
    client = RenderServiceClient(settings, session=session)
    return client.render(description, cancel_token=cancel_token)


__all__ = ["export_collection", "pdf_filename"]
