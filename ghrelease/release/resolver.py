"""Parameter resolution: expand build macros in the step configuration."""

from __future__ import annotations

from ghrelease.build.context import BuildContext, MacroError
from ghrelease.core.config import StepConfig, fix_empty_and_trim
from ghrelease.output.console import ConsoleProtocol
from ghrelease.release.model import ReleaseRequest

# Expansion order. On the first failure, this field and every later one
# keep their literal value.
_FIELDS = (
    "user",
    "password",
    "repository",
    "owner",
    "tag",
    "branch",
    "release_notes_file",
    "api_url",
)


def _blank_to_none(value: str | None) -> str | None:
    # Credentials are sent as typed; only a blank user means "anonymous".
    if value is None or not value.strip():
        return None
    return value


def resolve_parameters(
    config: StepConfig,
    build: BuildContext,
    console: ConsoleProtocol,
) -> ReleaseRequest:
    """Expand every configured value against ``build``.

    A macro failure is logged and never raised.
    """
    values: dict[str, str | None] = {name: getattr(config, name) for name in _FIELDS}
    try:
        for name in _FIELDS:
            values[name] = build.expand(values[name])
    except MacroError as e:
        console.error(f"Unable to resolve macro [{e}]")

    return ReleaseRequest(
        api_url=fix_empty_and_trim(values["api_url"]),
        user=_blank_to_none(values["user"]),
        password=values["password"],
        owner=fix_empty_and_trim(values["owner"]),
        repository=fix_empty_and_trim(values["repository"]),
        tag=fix_empty_and_trim(values["tag"]),
        branch=fix_empty_and_trim(values["branch"]),
        notes_file_path=fix_empty_and_trim(values["release_notes_file"]),
        ticket_url=config.ticket_url,
    )
