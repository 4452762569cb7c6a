from __future__ import annotations

from dataclasses import dataclass

from ghrelease.github.http import HttpClient


@dataclass(frozen=True, slots=True)
class GitHubSession:
    """Authenticated connection to one API endpoint.

    Request-scoped: created per build step and passed explicitly.
    """

    api_url: str
    user: str | None
    password: str | None
    http: HttpClient

    def __repr__(self) -> str:
        # Never leak the password into logs or tracebacks.
        return f"GitHubSession(api_url={self.api_url!r}, user={self.user!r})"


@dataclass(frozen=True, slots=True)
class Repository:
    owner: str
    name: str
    full_name: str  # owner/name, as reported by the API
    default_branch: str | None = None
    html_url: str | None = None


@dataclass(frozen=True, slots=True)
class NotesFile:
    """Current state of the remote release-notes file."""

    path: str
    branch: str
    raw_content: str | None
    sha: str  # blob SHA, required to update the file


@dataclass(frozen=True, slots=True)
class ReleaseDraft:
    tag: str
    name: str
    commitish: str | None
    body: str | None = None
    draft: bool = False
    prerelease: bool = False

    @classmethod
    def for_tag(cls, tag: str, branch: str | None, body: str | None) -> ReleaseDraft:
        """Published (non-draft, non-prerelease) release named after its tag."""
        return cls(tag=tag, name=tag, commitish=branch, body=body)

    def as_payload(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "tag_name": self.tag,
            "name": self.name,
            "draft": self.draft,
            "prerelease": self.prerelease,
        }
        if self.commitish is not None:
            payload["target_commitish"] = self.commitish
        if self.body is not None:
            payload["body"] = self.body
        return payload


@dataclass(frozen=True, slots=True)
class Release:
    id: int
    tag: str
    name: str | None
    html_url: str | None = None
