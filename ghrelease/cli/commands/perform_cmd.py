from __future__ import annotations

from pathlib import Path
from typing import NoReturn

import typer

from ghrelease.cli.context import build_context
from ghrelease.core.config import StepConfig, load_config, merge_overrides
from ghrelease.core.errors import ErrorCode
from ghrelease.core.result import Err
from ghrelease.release.performer import perform


def _exit(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def perform_release(
    config_path: Path | None = typer.Option(
        None, "--config", "-c", help="TOML file with a [release] table"
    ),
    api_url: str | None = typer.Option(
        None, "--api-url", help="GitHub Enterprise API URL (default: github.com)"
    ),
    user: str | None = typer.Option(None, "--user", envvar="GITHUB_USER", help="GitHub user"),
    password: str | None = typer.Option(
        None, "--password", envvar="GITHUB_PASSWORD", help="GitHub password", show_default=False
    ),
    owner: str | None = typer.Option(None, "--owner", help="Repository owner"),
    repository: str | None = typer.Option(None, "--repository", help="Repository name"),
    tag: str | None = typer.Option(None, "--tag", help="Release tag, e.g. ${RELEASE_VERSION}"),
    branch: str | None = typer.Option(None, "--branch", help="Branch the release is cut from"),
    release_notes_file: str | None = typer.Option(
        None, "--release-notes-file", help="Notes file path in the repository"
    ),
    ticket_url: str | None = typer.Option(
        None, "--ticket-url", help="Issue tracker URL used in the notes template"
    ),
    no_color: bool = typer.Option(False, "--no-color", help="Plain build log output"),
) -> None:
    """Create a GitHub release and rotate the release-notes file.

    Never fails the build: problems are reported in the log only.
    """
    config = StepConfig()
    if config_path is not None:
        loaded = load_config(config_path)
        if isinstance(loaded, Err):
            _exit(loaded.error.message, code=ErrorCode.USER_ERROR)
        config = loaded.value

    config = merge_overrides(
        config,
        api_url=api_url,
        user=user,
        password=password,
        owner=owner,
        repository=repository,
        tag=tag,
        branch=branch,
        release_notes_file=release_notes_file,
        ticket_url=ticket_url,
    )

    ctx = build_context(no_color=no_color)
    perform(ctx.build, config, console=ctx.console)
