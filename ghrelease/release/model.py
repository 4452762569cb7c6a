from __future__ import annotations

from dataclasses import dataclass

from ghrelease.core.config import DEFAULT_TICKET_URL
from ghrelease.github.model import GitHubSession, Repository
from ghrelease.output.console import ConsoleProtocol


@dataclass(frozen=True, slots=True)
class ReleaseRequest:
    """Step parameters after macro expansion.

    Blank values are normalized to None; a missing owner or repository
    simply makes the repository lookup fail later.
    """

    api_url: str | None
    user: str | None
    password: str | None
    owner: str | None
    repository: str | None
    tag: str | None
    branch: str | None
    notes_file_path: str | None
    ticket_url: str = DEFAULT_TICKET_URL

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.repository}"

    def __repr__(self) -> str:
        return (
            f"ReleaseRequest(api_url={self.api_url!r}, user={self.user!r}, "
            f"slug={self.slug!r}, tag={self.tag!r}, branch={self.branch!r}, "
            f"notes_file_path={self.notes_file_path!r})"
        )


@dataclass(frozen=True, slots=True)
class ReleaseContext:
    """Everything the stages after the connection share, passed explicitly."""

    request: ReleaseRequest
    session: GitHubSession
    repository: Repository
    console: ConsoleProtocol
