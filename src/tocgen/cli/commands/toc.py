from pathlib import Path

import typer
from pydantic import TypeAdapter

from tocgen.shared.models import TocEntry
from tocgen.toc import build_heading_forest, render_toc

_entries = TypeAdapter(list[TocEntry])


def toc(
    file_path: Path = typer.Argument(..., help="Path to the document file"),
    as_json: bool = typer.Option(False, "--json", help="Print nested JSON instead of a bullet list"),
    marker: str = typer.Option(
        "#", "--marker", "-m", envvar="TOCGEN_HEADING_MARKER", help="Heading marker character"
    ),
):
    """Print the table of contents of a document."""
    if not file_path.exists():
        typer.echo(f"Error: File not found: {file_path}", err=True)
        raise typer.Exit(1)

    try:
        forest = build_heading_forest(file_path.read_text(encoding="utf-8"), marker=marker)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    if as_json:
        entries = [TocEntry.from_node(node) for node in forest]
        typer.echo(_entries.dump_json(entries, by_alias=True, indent=2).decode())
        return

    if not forest:
        typer.echo("No headings found.")
        return

    typer.echo(render_toc(forest))
