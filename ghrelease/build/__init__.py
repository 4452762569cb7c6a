"""Build context of the running CI job."""

from .context import BuildContext, MacroError

__all__ = ["BuildContext", "MacroError"]
