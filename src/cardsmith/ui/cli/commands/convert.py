"""Implementation of the `cardsmith convert` and `cardsmith tokenize` commands."""

from __future__ import annotations

from typing import Annotated

import typer

from cardsmith.content.tokenizer import tokenize as tokenize_markup
from cardsmith.markdown import MarkdownConverter
from cardsmith.typesetting import MathTypesetter

from .._options import RENDERING_PANEL, OutputPathOption, SourcePathArgument
from ..diagnostics import CliEmitter
from ..utils import read_text_input, write_output


def convert(
    source: SourcePathArgument,
    output: OutputPathOption = None,
    sanitize: Annotated[
        bool,
        typer.Option(
            "--sanitize/--no-sanitize",
            help="Strip scripts and event handlers from the generated markup.",
            rich_help_panel=RENDERING_PANEL,
        ),
    ] = True,
) -> None:
    """Convert author-typed Markdown into flashcard markup."""
    converter = MarkdownConverter(MathTypesetter(emitter=CliEmitter()), sanitize=sanitize)
    result = converter.convert(read_text_input(source))
    write_output(result.html, output)


def tokenize(
    source: SourcePathArgument,
    output: OutputPathOption = None,
) -> None:
    """Turn inline $...$ notation in stored markup into math units."""
    write_output(tokenize_markup(read_text_input(source)), output)


__all__ = ["convert", "tokenize"]
