"""shtable CLI application."""

from __future__ import annotations

import csv
import io
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from shtable.config import load_config
from shtable.errors import ShTableError
from shtable.render import ConsoleSink, print_to_stdout
from shtable.table import Table


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        from shtable import __version__

        print(f"shtable {__version__}")
        raise typer.Exit()


app = typer.Typer(
    name="shtable",
    help="Print delimited text as an aligned terminal table",
    no_args_is_help=True,
    add_completion=False,
)


@app.callback()
def _app_callback(
    version: Annotated[  # noqa: ARG001
        bool,
        typer.Option("--version", "-V", help="Show version and exit", callback=version_callback),
    ] = False,
) -> None:
    """Aligned terminal tables."""
    pass


console = Console(highlight=False)
error_console = Console(stderr=True)


def read_table(text: str, delimiter: str) -> Table:
    """Build a table from delimited text whose first record is the header."""
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    records = [record for record in reader if record]
    if not records:
        return Table([])

    table = Table(records[0])
    table.extend_rows(records[1:])
    return table


@app.command()
def render(
    file: Annotated[
        Path | None,
        typer.Argument(help="Delimited input file (default: stdin)"),
    ] = None,
    delimiter: Annotated[
        str | None,
        typer.Option("--delimiter", "-d", help="Field delimiter"),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Omit the header and divider"),
    ] = False,
    no_header: Annotated[
        bool,
        typer.Option("--no-header", help="Omit the header and divider"),
    ] = False,
    encoding: Annotated[
        str | None,
        typer.Option("--encoding", help="Encoding used to measure cell widths"),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="Path to shtable.yaml"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Render delimited rows as a table."""
    if verbose:
        logging.basicConfig(format="%(name)s: %(message)s")
        logging.getLogger("shtable").setLevel(logging.DEBUG)

    try:
        settings = load_config(config)
        overrides: dict[str, object] = {}
        if delimiter is not None:
            overrides["delimiter"] = delimiter
        if encoding is not None:
            overrides["encoding"] = encoding
        if quiet:
            overrides["quiet"] = True
        if no_header:
            overrides["header"] = False
        if overrides:
            settings = settings.with_overrides(**overrides)

        if file:
            text = file.read_text(encoding="utf-8", errors="surrogateescape")
        else:
            text = sys.stdin.read()

        with read_table(text, settings.delimiter) as table:
            print_to_stdout(
                table,
                quiet=not settings.print_header,
                sink=ConsoleSink(console),
                measurer=settings.measurer(),
            )
    except (ShTableError, OSError) as e:
        error_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from e


def main() -> None:
    app()
