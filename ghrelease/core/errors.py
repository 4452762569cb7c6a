"""Exit codes for the ghrelease CLI.

The release step itself never fails a build: once ``perform`` runs, the
process exits with ``OK``. The other codes only cover problems detected
before the step starts (unreadable config, bad arguments, local notes
commands).
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are stable."""

    OK = 0
    USER_ERROR = 1
    IO_ERROR = 5
