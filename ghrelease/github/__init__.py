"""GitHub REST API access."""

from .client import (
    DEFAULT_API_URL,
    connect,
    create_file,
    create_release,
    get_file_content,
    get_repository,
    update_file,
)
from .errors import GitHubError
from .http import HttpClient, HttpError, MockHttpClient, RealHttpClient
from .model import GitHubSession, NotesFile, Release, ReleaseDraft, Repository

__all__ = [
    "DEFAULT_API_URL",
    "GitHubError",
    "GitHubSession",
    "HttpClient",
    "HttpError",
    "MockHttpClient",
    "NotesFile",
    "RealHttpClient",
    "Release",
    "ReleaseDraft",
    "Repository",
    "connect",
    "create_file",
    "create_release",
    "get_file_content",
    "get_repository",
    "update_file",
]
