"""Terminal implementation of the release prompts.

Version choice uses the arrow-key selector on a TTY and a numbered list
otherwise. Ctrl-C/EOF (typer.Abort) and `q`/Esc in the selector are
reported as CANCELLED, never as "no".
"""

from __future__ import annotations

from collections.abc import Callable

import typer

from xr.cli.selector import SelectorOption, is_interactive_terminal, select_one
from xr.output.console import ConsoleProtocol, Style
from xr.release.prompts import CANCELLED, Chosen, ConfirmAnswer, Confirmed, VersionAnswer
from xr.release.semver import is_valid_version, next_versions

_CUSTOM = "custom"

AskText = Callable[[str, str], str]


def _ask_text(prompt: str, default: str) -> str:
    return str(typer.prompt(prompt, default=default))


class TerminalPrompter:
    def __init__(
        self,
        console: ConsoleProtocol,
        *,
        interactive: bool | None = None,
        ask: AskText = _ask_text,
        ask_yes_no: Callable[[str], bool] = lambda msg: typer.confirm(msg, default=True),
    ) -> None:
        self._console = console
        self._interactive = is_interactive_terminal() if interactive is None else interactive
        self._ask = ask
        self._ask_yes_no = ask_yes_no

    def confirm(self, message: str) -> ConfirmAnswer:
        try:
            return Confirmed(bool(self._ask_yes_no(message)))
        except typer.Abort:
            return CANCELLED

    def choose_version(self, current: str) -> VersionAnswer:
        choices = [
            SelectorOption(value=c.version, label=c.kind, detail=c.version)
            for c in next_versions(current)
        ]
        choices.append(SelectorOption(value=_CUSTOM, label=_CUSTOM, detail="enter a version"))

        try:
            picked = self._pick(current, choices)
            if picked is None:
                return CANCELLED
            if picked == _CUSTOM:
                return Chosen(self._custom(current))
            return Chosen(picked)
        except typer.Abort:
            return CANCELLED

    def _pick(self, current: str, choices: list[SelectorOption[str]]) -> str | None:
        subtitle = f"current version: {current or 'none'}"
        if self._interactive:
            result = select_one(
                title="Select the next version",
                subtitle=subtitle,
                options=choices,
            )
            return result.value if result.action == "select" else None

        self._console.print("Select the next version", Style.BOLD)
        self._console.print(subtitle, Style.DIM)
        for i, choice in enumerate(choices, start=1):
            self._console.print(f"  {i}. {choice.label:<10} {choice.detail or ''}")

        while True:
            raw = self._ask("Select", "1").strip()
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return choices[int(raw) - 1].value
            self._console.warning(f"pick a number between 1 and {len(choices)}")

    def _custom(self, current: str) -> str:
        while True:
            value = self._ask("Version", current).strip()
            if is_valid_version(value):
                return value
            self._console.warning(f"not a valid semantic version: {value!r}")
