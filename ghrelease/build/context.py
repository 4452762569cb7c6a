"""Build context and macro expansion.

CI runners hand build variables to a step through its environment
(``BUILD_NUMBER``, ``GIT_COMMIT``, job parameters such as
``RELEASE_VERSION``). Configuration values reference them as ``${NAME}``
or ``$NAME``.

Expansion rules:
- ``${NAME}`` must be defined, otherwise :class:`MacroError` is raised.
- ``$NAME`` is replaced when defined and left untouched otherwise.
- An unterminated ``${`` raises :class:`MacroError`.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

__all__ = ["BuildContext", "MacroError"]

_NAME = r"[A-Za-z_][A-Za-z0-9_]*"
_MACRO = re.compile(rf"\$\{{(?P<braced>[^}}]*)\}}|\$(?P<bare>{_NAME})")
_VALID_NAME = re.compile(rf"^{_NAME}$")


class MacroError(Exception):
    """A macro could not be expanded."""


def _empty_env() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class BuildContext:
    """Variables of the running build."""

    env: Mapping[str, str] = field(default_factory=_empty_env)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> BuildContext:
        """Snapshot the process environment (or ``environ``)."""
        source = os.environ if environ is None else environ
        return cls(env=MappingProxyType(dict(source)))

    def expand(self, text: str | None) -> str | None:
        """Expand every macro in ``text``.

        Raises:
            MacroError: On an unknown ``${NAME}`` or malformed macro.
        """
        if text is None:
            return None

        def substitute(match: re.Match[str]) -> str:
            bare = match.group("bare")
            if bare is not None:
                return self.env.get(bare, match.group(0))

            name = match.group("braced").strip()
            if not _VALID_NAME.match(name):
                raise MacroError(f"Invalid macro name '{name}' in '{text}'")
            if name not in self.env:
                raise MacroError(f"Unrecognized macro '{name}' in '{text}'")
            return self.env[name]

        expanded = _MACRO.sub(substitute, text)
        if "${" in _MACRO.sub("", text):
            raise MacroError(f"Unterminated macro in '{text}'")
        return expanded
