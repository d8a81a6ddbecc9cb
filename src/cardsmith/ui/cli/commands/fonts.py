"""Implementation of the `cardsmith fonts` command."""

from __future__ import annotations

from rich.table import Table

from cardsmith.theme.fonts import FONT_CATALOG, resolve_css_stack

from ..state import get_cli_state


def fonts() -> None:
    """List the fonts available to collection themes."""
    table = Table(title="Font catalog", show_lines=False)
    table.add_column("Name", style="bold")
    table.add_column("Label")
    table.add_column("Source")
    table.add_column("CSS stack", overflow="fold")

    for font in FONT_CATALOG:
        table.add_row(
            font.name,
            font.display_name,
            "system" if font.is_system else "remote",
            resolve_css_stack(font.name),
        )

    get_cli_state().console.print(table)


__all__ = ["fonts"]
