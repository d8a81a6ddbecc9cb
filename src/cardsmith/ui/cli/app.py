"""Typer application wiring for the cardsmith CLI."""

from __future__ import annotations

from typing import Annotated

import typer

from cardsmith.version import get_version

from ._options import DebugOption, VerboseOption
from .commands import convert, export, fonts, tokenize
from .state import debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Author flashcards in Markdown and export collections to PDF.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        get_cli_state().console.print(f"cardsmith {get_version()}")
        raise typer.Exit()


@app.callback()
def root(
    verbose: VerboseOption = 0,
    debug: DebugOption = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show the installed version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ] = False,
) -> None:
    """Configure diagnostics shared by every command."""
    set_cli_state(verbosity=verbose, debug=debug)


app.command()(convert)
app.command()(tokenize)
app.command()(export)
app.command()(fonts)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover - unexpected failures
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
