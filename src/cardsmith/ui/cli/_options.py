"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer


INPUTS_PANEL = "Input Handling"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"
DIAGNOSTICS_PANEL = "Diagnostics"

SourcePathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="INPUT",
        help="Source document to read ('-' reads stdin).",
        allow_dash=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

BundlePathArgument = Annotated[
    Path,
    typer.Argument(
        metavar="BUNDLE",
        help="YAML or JSON file holding a 'collection' and its 'flashcards'.",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        rich_help_panel=INPUTS_PANEL,
    ),
]

OutputPathOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        help="Write the result to this file instead of stdout.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

WidthOption = Annotated[
    float | None,
    typer.Option(
        "--width",
        min=1.0,
        help="Card width in millimetres (defaults to the collection setting).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

HeightOption = Annotated[
    float | None,
    typer.Option(
        "--height",
        min=1.0,
        help="Card height in millimetres (defaults to the collection setting).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

VerboseOption = Annotated[
    int,
    typer.Option(
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]

DebugOption = Annotated[
    bool,
    typer.Option(
        "--debug",
        help="Show full tracebacks when an unexpected error occurs.",
        rich_help_panel=DIAGNOSTICS_PANEL,
    ),
]
