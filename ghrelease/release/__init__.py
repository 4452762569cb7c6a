"""The release build step."""

from .model import ReleaseContext, ReleaseRequest
from .performer import create_release, fetch_notes, perform, rewrite_notes
from .resolver import resolve_parameters

__all__ = [
    "ReleaseContext",
    "ReleaseRequest",
    "create_release",
    "fetch_notes",
    "perform",
    "resolve_parameters",
    "rewrite_notes",
]
