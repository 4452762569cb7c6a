from __future__ import annotations

from dataclasses import dataclass

from ghrelease.build.context import BuildContext
from ghrelease.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    build: BuildContext
    console: ConsoleProtocol


def build_context(*, no_color: bool = False) -> CLIContext:
    return CLIContext(
        build=BuildContext.from_environ(),
        console=RichConsole(no_color=no_color),
    )
