from __future__ import annotations

import typer

from ghrelease import __version__
from ghrelease.cli.commands.notes_cmd import notes_app
from ghrelease.cli.commands.perform_cmd import perform_release


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# Commands
app.command("perform")(perform_release)

# Sub-apps
app.add_typer(notes_app, name="notes", help="Inspect a local release-notes file.")


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    del version


def main() -> None:
    app()
