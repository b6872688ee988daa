import asyncio
import logging

import typer
from pydantic import ValidationError

from tocgen.cli.config import get_settings
from tocgen.indexer.reindex import run_reindex


def reindex():
    """Rebuild the search index entry of every article."""
    try:
        settings = get_settings()
    except ValidationError:
        typer.echo("Error: TOCGEN_DATABASE_URL environment variable not set", err=True)
        raise typer.Exit(1)

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        count = asyncio.run(run_reindex(settings))
    except Exception as e:
        typer.echo(f"Error: reindex failed: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Reindexed {count} articles.")
