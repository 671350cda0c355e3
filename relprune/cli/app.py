from __future__ import annotations

import typer

from relprune import __version__
from relprune.cli.commands.prune import prune

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


app.command()(prune)


def _show_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", callback=_show_version, is_eager=True
    ),
) -> None:
    """Prune old assets from GitHub releases."""


def main() -> None:
    app()
