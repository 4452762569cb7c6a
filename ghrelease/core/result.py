"""Result type used by every fallible GitHub and config operation.

Stages of a release step never raise for expected failures (missing file,
HTTP error, bad TOML). They return ``Ok(value)`` or ``Err(error)`` and the
caller decides whether the failure is fatal for the rest of the step.

Usage:
    notes = get_file_content(session, repository, "RELEASE-NOTES.md", "main")
    match notes:
        case Ok(file):
            print(file.raw_content)
        case Err(error):
            print(f"no notes: {error.pretty()}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

__all__ = ["Ok", "Err", "Result"]

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error payload (usually a frozen error dataclass).
    """

    error: E


Result: TypeAlias = Ok[T] | Err[E]
