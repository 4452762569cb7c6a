"""GitHub REST client for the release step.

Only the handful of endpoints the step needs:

- ``GET  /repos/{owner}/{repo}``
- ``GET  /repos/{owner}/{repo}/contents/{path}?ref={branch}``
- ``POST /repos/{owner}/{repo}/releases``
- ``PUT  /repos/{owner}/{repo}/contents/{path}`` (update with ``sha``, create without)

Every call authenticates with HTTP Basic user/password. Errors come back as
``Err(GitHubError)``; nothing here raises for an API or network failure.
"""

from __future__ import annotations

import base64
import binascii
from urllib.parse import quote, urlsplit

from ghrelease.core.result import Err, Ok, Result
from ghrelease.core.structured import as_str_dict, get_str
from ghrelease.github.errors import GitHubError, GitHubErrorKind
from ghrelease.github.http import HttpClient, HttpError, RealHttpClient
from ghrelease.github.model import GitHubSession, NotesFile, Release, ReleaseDraft, Repository

__all__ = [
    "DEFAULT_API_URL",
    "connect",
    "create_file",
    "create_release",
    "get_file_content",
    "get_repository",
    "update_file",
]

DEFAULT_API_URL = "https://api.github.com"


def _from_http(error: HttpError, message: str) -> GitHubError:
    kind: GitHubErrorKind
    if error.status in (401, 403):
        kind = "auth_failed"
    elif error.status == 404:
        kind = "not_found"
    elif error.status == 0:
        kind = "connection_failed"
    else:
        kind = "request_failed"
    return GitHubError(kind=kind, message=message, status=error.status, hint=str(error))


def _headers(session: GitHubSession) -> dict[str, str]:
    headers = {"Accept": "application/vnd.github+json"}
    if session.user is not None:
        token = f"{session.user}:{session.password or ''}".encode("utf-8")
        headers["Authorization"] = "Basic " + base64.b64encode(token).decode("ascii")
    return headers


def _repo_url(session: GitHubSession, repository: Repository) -> str:
    owner = quote(repository.owner, safe="")
    name = quote(repository.name, safe="")
    return f"{session.api_url}/repos/{owner}/{name}"


def _contents_url(session: GitHubSession, repository: Repository, path: str) -> str:
    return f"{_repo_url(session, repository)}/contents/{quote(path.lstrip('/'), safe='/')}"


def connect(
    api_url: str | None,
    user: str | None,
    password: str | None,
    *,
    http: HttpClient | None = None,
) -> Result[GitHubSession, GitHubError]:
    """Open a session on github.com, or on ``api_url`` when it is set.

    ``api_url`` is the enterprise API base, e.g.
    ``https://github.example.com/api/v3``. No request is sent here.
    """
    base = (api_url or "").strip().rstrip("/") or DEFAULT_API_URL
    parts = urlsplit(base)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        return Err(
            GitHubError(
                kind="connection_failed",
                message=f"invalid API URL: {base}",
                hint="expected http(s)://host[/path]",
            )
        )

    return Ok(
        GitHubSession(
            api_url=base,
            user=user,
            password=password,
            http=http if http is not None else RealHttpClient(),
        )
    )


def get_repository(
    session: GitHubSession, owner: str | None, name: str | None
) -> Result[Repository, GitHubError]:
    if not owner or not name:
        return Err(
            GitHubError(
                kind="invalid_input",
                message=f"repository must be owner/name, got {owner}/{name}",
            )
        )

    url = _repo_url(session, Repository(owner=owner, name=name, full_name=f"{owner}/{name}"))
    result = session.http.request_json("GET", url, headers=_headers(session))
    if isinstance(result, Err):
        return Err(_from_http(result.error, f"failed to get repository {owner}/{name}"))

    data = as_str_dict(result.value)
    if data is None:
        return Err(
            GitHubError(kind="invalid_response", message=f"unexpected repository payload: {url}")
        )

    return Ok(
        Repository(
            owner=owner,
            name=name,
            full_name=get_str(data, "full_name") or f"{owner}/{name}",
            default_branch=get_str(data, "default_branch"),
            html_url=get_str(data, "html_url"),
        )
    )


def _decode_content(data: dict[str, object], where: str) -> Result[str | None, GitHubError]:
    """Decode inline base64 content; Ok(None) when the API did not inline it."""
    encoding = get_str(data, "encoding")
    content = data.get("content")
    if encoding != "base64" or not isinstance(content, str):
        return Ok(None)

    try:
        raw = base64.b64decode(content, validate=False)
    except (binascii.Error, ValueError) as e:
        return Err(
            GitHubError(
                kind="invalid_response",
                message=f"failed to decode contents: {e}",
                hint=where,
            )
        )

    try:
        return Ok(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        return Err(
            GitHubError(
                kind="invalid_response",
                message=f"invalid UTF-8 in contents: {e}",
                hint=where,
            )
        )


def get_file_content(
    session: GitHubSession,
    repository: Repository,
    path: str,
    ref: str,
) -> Result[NotesFile, GitHubError]:
    """Fetch a text file from ``ref`` together with its blob SHA."""
    url = f"{_contents_url(session, repository, path)}?ref={quote(ref, safe='')}"
    result = session.http.request_json("GET", url, headers=_headers(session))
    if isinstance(result, Err):
        return Err(_from_http(result.error, f"failed to get {path} on {ref}"))

    data = as_str_dict(result.value)
    if data is None:
        # A list means `path` is a directory.
        return Err(
            GitHubError(kind="invalid_response", message=f"not a file: {path}", hint=url)
        )

    sha = get_str(data, "sha")
    if sha is None:
        return Err(
            GitHubError(kind="invalid_response", message=f"missing sha for {path}", hint=url)
        )

    decoded = _decode_content(data, url)
    if isinstance(decoded, Err):
        return decoded
    content = decoded.value

    if content is None:
        # Large files are not inlined by the contents API.
        download_url = get_str(data, "download_url")
        if download_url is None:
            return Err(
                GitHubError(
                    kind="invalid_response",
                    message=f"no content and no download_url for {path}",
                    hint=url,
                )
            )
        text = session.http.get_text(download_url, headers=_headers(session))
        if isinstance(text, Err):
            return Err(_from_http(text.error, f"failed to download {path}"))
        content = text.value

    return Ok(NotesFile(path=path, branch=ref, raw_content=content, sha=sha))


def create_release(
    session: GitHubSession,
    repository: Repository,
    draft: ReleaseDraft,
) -> Result[Release, GitHubError]:
    url = f"{_repo_url(session, repository)}/releases"
    result = session.http.request_json(
        "POST", url, headers=_headers(session), body=draft.as_payload()
    )
    if isinstance(result, Err):
        return Err(_from_http(result.error, f"failed to create release {draft.tag}"))

    data = as_str_dict(result.value)
    if data is None:
        return Err(
            GitHubError(kind="invalid_response", message=f"unexpected release payload: {url}")
        )

    release_id = data.get("id")
    return Ok(
        Release(
            id=release_id if isinstance(release_id, int) else 0,
            tag=get_str(data, "tag_name") or draft.tag,
            name=get_str(data, "name"),
            html_url=get_str(data, "html_url"),
        )
    )


def _put_contents(
    session: GitHubSession,
    repository: Repository,
    *,
    path: str,
    content: str,
    message: str,
    branch: str | None,
    sha: str | None,
    action: str,
) -> Result[None, GitHubError]:
    body: dict[str, object] = {
        "message": message,
        "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
    }
    if branch is not None:
        body["branch"] = branch
    if sha is not None:
        body["sha"] = sha

    url = _contents_url(session, repository, path)
    result = session.http.request_json("PUT", url, headers=_headers(session), body=body)
    if isinstance(result, Err):
        return Err(_from_http(result.error, f"failed to {action} {path}"))
    return Ok(None)


def update_file(
    session: GitHubSession,
    repository: Repository,
    notes_file: NotesFile,
    content: str,
    message: str,
    branch: str | None,
) -> Result[None, GitHubError]:
    """Replace an existing file; rejected by GitHub if ``notes_file.sha`` is stale."""
    return _put_contents(
        session,
        repository,
        path=notes_file.path,
        content=content,
        message=message,
        branch=branch,
        sha=notes_file.sha,
        action="update",
    )


def create_file(
    session: GitHubSession,
    repository: Repository,
    path: str,
    content: str,
    message: str,
    branch: str | None,
) -> Result[None, GitHubError]:
    return _put_contents(
        session,
        repository,
        path=path,
        content=content,
        message=message,
        branch=branch,
        sha=None,
        action="create",
    )
