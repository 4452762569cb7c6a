"""The release build step.

``perform`` runs the stages in order, each one isolated:

1. resolve macros in the configuration
2. connect and look up the repository (failure skips everything below)
3. fetch the release-notes file (failure means "no notes")
4. create the release
5. rewrite the notes file, only if step 4 succeeded

Failures are reported in the build log only. ``perform`` always returns
True so that a GitHub outage never fails the build.
"""

from __future__ import annotations

from ghrelease.build.context import BuildContext
from ghrelease.core.config import StepConfig
from ghrelease.core.result import Err
from ghrelease.github import client
from ghrelease.github.http import HttpClient
from ghrelease.github.model import NotesFile, ReleaseDraft
from ghrelease.output.console import ConsoleProtocol, Style
from ghrelease.release import notes as notes_fmt
from ghrelease.release.model import ReleaseContext, ReleaseRequest
from ghrelease.release.resolver import resolve_parameters

__all__ = ["create_release", "fetch_notes", "perform", "rewrite_notes"]


def perform(
    build: BuildContext,
    config: StepConfig,
    *,
    console: ConsoleProtocol,
    http: HttpClient | None = None,
) -> bool:
    """Create the GitHub release and rotate the notes file. Always True."""
    request = resolve_parameters(config, build, console)
    ctx = _open(request, console=console, http=http)
    if ctx is None:
        return True

    console.header(f"Release {request.tag} of {ctx.repository.full_name}")
    current = fetch_notes(ctx)
    if create_release(ctx, current):
        rewrite_notes(ctx, current)

    # The build must not fail because the GitHub release failed.
    return True


def _open(
    request: ReleaseRequest,
    *,
    console: ConsoleProtocol,
    http: HttpClient | None,
) -> ReleaseContext | None:
    target = f"{request.api_url or client.DEFAULT_API_URL}/{request.slug}"

    session = client.connect(request.api_url, request.user, request.password, http=http)
    if isinstance(session, Err):
        console.error(f"Unable to connect to repository [{target}], [{session.error.pretty()}]")
        return None

    repository = client.get_repository(session.value, request.owner, request.repository)
    if isinstance(repository, Err):
        console.error(
            f"Unable to connect to repository [{target}], [{repository.error.pretty()}]"
        )
        return None

    return ReleaseContext(
        request=request,
        session=session.value,
        repository=repository.value,
        console=console,
    )


def fetch_notes(ctx: ReleaseContext) -> NotesFile | None:
    """Current notes file, or None when it is missing or cannot be read.

    Not-found and any other fetch error are deliberately treated alike.
    """
    path = ctx.request.notes_file_path
    ref = ctx.request.branch or ctx.repository.default_branch
    if path is None or ref is None:
        missing = "release notes file" if path is None else "branch"
        ctx.console.error(f"Unable to find file [{path}], [{missing} is not set]")
        return None

    result = client.get_file_content(ctx.session, ctx.repository, path, ref)
    if isinstance(result, Err):
        ctx.console.error(f"Unable to find file [{path}], [{result.error.pretty()}]")
        return None
    return result.value


def create_release(ctx: ReleaseContext, current: NotesFile | None) -> bool:
    """Create the release for the resolved tag on the resolved branch."""
    tag = ctx.request.tag
    if tag is None:
        ctx.console.error("Unable to create release, [tag is not set]")
        return False

    body: str | None = None
    if current is not None and current.raw_content is not None:
        body = notes_fmt.extract_next_release(current.raw_content, tag)
        if body is None:
            ctx.console.warning(
                f"No separator line in {current.path}: release {tag} has no description"
            )

    draft = ReleaseDraft.for_tag(tag, ctx.request.branch, body)
    result = client.create_release(ctx.session, ctx.repository, draft)
    if isinstance(result, Err):
        ctx.console.error(f"Unable to create release, [{result.error.pretty()}]")
        return False

    ctx.console.success(f"Release created successfully [{tag}]")
    if result.value.html_url:
        ctx.console.print(result.value.html_url, Style.DIM)
    return True


def rewrite_notes(ctx: ReleaseContext, current: NotesFile | None) -> bool:
    """Reset the notes file to the template after a successful release.

    Updates the file against its fetched SHA when it existed, creates it
    otherwise. Returns True when the write succeeded.
    """
    request = ctx.request
    tag = request.tag or ""
    ticket_url = request.ticket_url

    if current is not None:
        message = notes_fmt.commit_message(current.path, tag)
        content = notes_fmt.rotated_notes(current.raw_content or "", tag, ticket_url)
        result = client.update_file(
            ctx.session, ctx.repository, current, content, message, request.branch
        )
        if isinstance(result, Err):
            ctx.console.error(
                f"Unable to update release note file [{current.path}], [{result.error.pretty()}]"
            )
            return False
        ctx.console.success(message)
        return True

    path = request.notes_file_path
    if path is None:
        ctx.console.error("Unable to create release note file [None], [path is not set]")
        return False

    message = notes_fmt.commit_message(path, tag)
    result = client.create_file(
        ctx.session,
        ctx.repository,
        path,
        notes_fmt.initial_notes(ticket_url),
        message,
        request.branch,
    )
    if isinstance(result, Err):
        ctx.console.error(
            f"Unable to create release note file [{path}], [{result.error.pretty()}]"
        )
        return False
    ctx.console.success(message)
    return True
