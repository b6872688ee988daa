from typing import Optional

import typer

from tocgen import __version__
from tocgen.cli.commands.reindex import reindex as reindex_cmd
from tocgen.cli.commands.toc import toc as toc_cmd

app = typer.Typer(
    name="tocgen",
    help="tocgen - Table of contents extraction for markdown articles",
)

app.command("toc")(toc_cmd)
app.command("reindex")(reindex_cmd)


def version_callback(value: bool):
    if value:
        print(f"tocgen version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True
    ),
):
    pass


if __name__ == "__main__":
    app()
