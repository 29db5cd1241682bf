import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ember_definitions.core.service import find_definition_in_file
from ember_definitions.models import Location, Position

console = Console()


def _render_locations(locations: list[Location]) -> None:
    table = Table(show_lines=False)
    table.add_column("path")
    table.add_column("exists")
    for location in locations:
        table.add_row(location.path, "yes" if Path(location.path).is_file() else "no")
    console.print(table)
    console.print(f"({len(locations)} candidates)")


def definition(
    path: Annotated[str, typer.Argument(help="Script file containing the reference.")],
    line: Annotated[int, typer.Option(help="Zero-based line of the cursor.")],
    column: Annotated[int, typer.Option(help="Zero-based column of the cursor.")],
    root: Annotated[str, typer.Option(help="Project root.")] = ".",
    language: Annotated[str | None, typer.Option(help="Script language (javascript or typescript).")] = None,
    existing_only: Annotated[bool, typer.Option("--existing-only", help="Only list files that exist.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Find candidate definition files for the reference at a cursor position."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        locations = find_definition_in_file(
            path,
            Position(line=line, column=column),
            str(Path(root).absolute()),
            language=language,
            existing_only=existing_only,
        )
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from None

    if locations is None:
        console.print("[yellow]No definition found.[/yellow]")
        return
    _render_locations(locations)
