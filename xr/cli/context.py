from __future__ import annotations

from dataclasses import dataclass

from xr.cli.prompts import TerminalPrompter
from xr.output.console import ConsoleProtocol, RichConsole
from xr.release.prompts import Prompter


@dataclass(frozen=True, slots=True)
class CLIContext:
    console: ConsoleProtocol
    prompter: Prompter


def build_context(*, verbose: bool = False) -> CLIContext:
    console = RichConsole(verbose=verbose)
    return CLIContext(console=console, prompter=TerminalPrompter(console))
