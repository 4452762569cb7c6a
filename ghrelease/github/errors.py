"""Error payload for GitHub operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

GitHubErrorKind = Literal[
    "invalid_input",
    "connection_failed",
    "auth_failed",
    "not_found",
    "request_failed",
    "invalid_response",
]


@dataclass(frozen=True, slots=True)
class GitHubError:
    kind: GitHubErrorKind
    message: str
    status: int = 0
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message
