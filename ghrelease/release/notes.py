"""Release-notes file conventions.

The notes file keeps the upcoming release at the top under a
``Next release`` heading, followed by a separator line and the history of
previous releases::

    Next release
    ============

    ### New features
    ...

    ###################

    1.2.0
    =====
    ...

Releasing extracts everything above the separator as the release body
(with ``Next release`` renamed to the tag), then rotates the file: a fresh
template goes on top and the old content, renamed the same way, moves
below a new separator.
"""

from __future__ import annotations

import re

__all__ = [
    "NEXT_RELEASE",
    "RELEASE_NOTES_SEPARATOR",
    "commit_message",
    "extract_next_release",
    "initial_notes",
    "is_separator",
    "release_notes_template",
    "rotated_notes",
]

NEXT_RELEASE = "Next release"
RELEASE_NOTES_SEPARATOR = "###################"

_SEPARATOR_LINE = re.compile(r"^#{3,}$")
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def is_separator(line: str) -> bool:
    """True for the legacy marker or any line made only of three or more ``#``."""
    stripped = line.strip()
    return stripped == RELEASE_NOTES_SEPARATOR or bool(_SEPARATOR_LINE.match(stripped))


def extract_next_release(content: str, tag: str) -> str | None:
    """Return the section above the first separator, renamed to ``tag``.

    Lines end at LF, CR or CRLF only; every line before the
    separator is kept with a trailing newline.
    Returns None when the content has no separator line.
    """
    lines: list[str] = []
    for line in _LINE_BREAK.split(content):
        if is_separator(line):
            return "".join(lines).replace(NEXT_RELEASE, tag)
        lines.append(line + "\n")
    return None


def release_notes_template(ticket_url: str) -> str:
    """Empty "next release" section with placeholder ticket links."""
    return (
        f"{NEXT_RELEASE}\n"
        "============\n"
        "\n"
        "### New features\n"
        "\n"
        f"* [JIRA-TICKET]({ticket_url}): Some feature\n"
        "\n"
        "### Improvements\n"
        "\n"
        f"* [JIRA-TICKET]({ticket_url}): Some improvement\n"
        "\n"
        "### Bug fixes\n"
        "\n"
        f"* [JIRA-TICKET]({ticket_url}): Some bug fix"
    )


def rotated_notes(old_content: str, tag: str, ticket_url: str) -> str:
    """New file content after releasing ``tag``: template, separator, history."""
    return (
        release_notes_template(ticket_url)
        + "\n\n"
        + RELEASE_NOTES_SEPARATOR
        + "\n\n"
        + old_content.replace(NEXT_RELEASE, tag)
    )


def initial_notes(ticket_url: str) -> str:
    """Content of a notes file created from scratch."""
    return release_notes_template(ticket_url) + "\n" + RELEASE_NOTES_SEPARATOR + "\n"


def commit_message(path: str, tag: str) -> str:
    return f"Updating {path} after release {tag}"
