from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from ghrelease.core.config import DEFAULT_TICKET_URL
from ghrelease.core.errors import ErrorCode
from ghrelease.release.notes import extract_next_release, rotated_notes

notes_app = typer.Typer(add_completion=False, no_args_is_help=True)


def _exit(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        _exit(f"failed to read {path}: {e}", code=ErrorCode.IO_ERROR)


@notes_app.command("extract")
def extract(
    path: Path = typer.Argument(..., help="Local release-notes file"),
    tag: str = typer.Option(..., "--tag", help="Tag replacing the 'Next release' heading"),
) -> None:
    """Print the release body that would be published for TAG."""
    body = extract_next_release(_read(path), tag)
    if body is None:
        _exit(f"no separator line in {path}", code=ErrorCode.USER_ERROR)
    typer.echo(body, nl=False)


@notes_app.command("rotate")
def rotate(
    path: Path = typer.Argument(..., help="Local release-notes file"),
    tag: str = typer.Option(..., "--tag", help="Tag that was just released"),
    ticket_url: str = typer.Option(
        DEFAULT_TICKET_URL, "--ticket-url", help="Issue tracker URL used in the template"
    ),
    write: bool = typer.Option(False, "--write", help="Rewrite PATH instead of printing"),
) -> None:
    """Print (or write) the notes file as it looks after releasing TAG."""
    content = rotated_notes(_read(path), tag, ticket_url)
    if not write:
        typer.echo(content, nl=False)
        return

    try:
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        _exit(f"failed to write {path}: {e}", code=ErrorCode.IO_ERROR)
    typer.echo(f"updated {path}")
