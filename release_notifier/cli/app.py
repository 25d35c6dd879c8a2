from __future__ import annotations

import typer

from release_notifier import __version__
from release_notifier.cli.commands.cache import clear_cache
from release_notifier.cli.commands.releases import check, latest, prerelease

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command()(latest)
app.command()(prerelease)
app.command()(check)
app.command("clear-cache")(clear_cache)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(False, "--version", help="Show version and exit."),
) -> None:
    """Check a repository's GitHub releases for newer versions."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)


def main() -> None:
    app()
