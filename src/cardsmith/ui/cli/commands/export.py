"""Implementation of the `cardsmith export` command."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import typer

from cardsmith.core.config import RenderServiceConfig
from cardsmith.core.exceptions import (
    CardsmithError,
    ConfigurationError,
    ExportCancelledError,
    RenderServiceError,
)
from cardsmith.export import ExportAssembler, export_collection, pdf_filename
from cardsmith.typesetting import MathTypesetter

from .._options import (
    OUTPUT_PANEL,
    RENDERING_PANEL,
    BundlePathArgument,
    HeightOption,
    OutputPathOption,
    WidthOption,
)
from ..diagnostics import CliEmitter
from ..state import emit_error, emit_info, emit_warning
from ..utils import load_bundle, write_output


def _resolve_config(render_url: str | None, timeout: float | None) -> RenderServiceConfig:
    config = RenderServiceConfig.from_env()
    overrides: dict[str, object] = {}
    if render_url is not None:
        overrides["base_url"] = render_url
    if timeout is not None:
        overrides["timeout"] = timeout
    if not overrides:
        return config
    return RenderServiceConfig.model_validate({**config.model_dump(), **overrides})


def export(
    bundle_path: BundlePathArgument,
    output: OutputPathOption = None,
    render_url: Annotated[
        str | None,
        typer.Option(
            "--render-url",
            metavar="URL",
            help="Base address of the rendering service (overrides CARDSMITH_RENDER_URL).",
            rich_help_panel=RENDERING_PANEL,
        ),
    ] = None,
    width: WidthOption = None,
    height: HeightOption = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            min=0.1,
            help="Seconds to wait for the rendering service.",
            rich_help_panel=RENDERING_PANEL,
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            help="Write the document description JSON instead of calling the service.",
            rich_help_panel=OUTPUT_PANEL,
        ),
    ] = False,
) -> None:
    """Export a collection to PDF through the rendering service.

    The PDF lands in ``--output`` or ``<title>-flashcards.pdf`` in the current
    directory. With ``--dry-run`` the JSON payload is written instead (stdout
    when no output is given).
    """
    try:
        bundle = load_bundle(bundle_path)
    except CardsmithError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    try:
        config = _resolve_config(render_url, timeout)
    except ConfigurationError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    assembler = ExportAssembler.from_config(config, MathTypesetter(emitter=CliEmitter()))

    if dry_run:
        description = assembler.assemble(
            bundle.collection, bundle.flashcards, width_mm=width, height_mm=height
        )
        payload = json.dumps(description.to_payload(), indent=2, ensure_ascii=False)
        write_output(payload, output)
        return

    try:
        document = export_collection(
            bundle.collection,
            bundle.flashcards,
            config=config,
            width_mm=width,
            height_mm=height,
            assembler=assembler,
        )
    except ExportCancelledError as exc:
        emit_warning(str(exc))
        raise typer.Exit(code=1) from exc
    except (ConfigurationError, RenderServiceError) as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    target = output or Path(pdf_filename(bundle.collection.title))
    write_output(document, target)
    emit_info(f"Wrote {len(bundle.flashcards) * 2} pages to {target}")


__all__ = ["export"]
