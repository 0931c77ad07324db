from __future__ import annotations

import typer

from releaseflow import __version__
from releaseflow.cli.commands.release import (
    bump_version_cmd,
    finish_release_cmd,
    replace_badge_cmd,
    start_release_cmd,
)


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("bump-version")(bump_version_cmd)
app.command("start-release")(start_release_cmd)
app.command("finish-release")(finish_release_cmd)
app.command("replace-badge")(replace_badge_cmd)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Show version and exit.",
    ),
) -> None:
    """Bump versions and drive release branches of a package."""
    del version


def main() -> None:
    app()
