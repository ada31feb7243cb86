"""Console output for the release run.

Release components only see ConsoleProtocol. The CLI wires in RichConsole;
tests use MockConsole, which records every line with its Style so
assertions stay independent of terminal colors.

Every message is plain text. Manifest paths and TOML table names such as
`[package]` are printed literally, never interpreted as Rich markup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
    "OutputRecord",
    "debug_enabled",
]

_DEBUG_ENV = "XR_DEBUG"


class Style(Enum):
    """Semantic style of a console line; values are Rich theme names."""

    DEFAULT = "xr.default"
    SUCCESS = "xr.success"
    ERROR = "xr.error"
    WARNING = "xr.warning"
    INFO = "xr.info"
    DIM = "xr.dim"
    BOLD = "xr.bold"
    HEADER = "xr.header"
    DEBUG = "xr.debug"

    def __str__(self) -> str:
        return self.name.lower()


_THEME: dict[str, str] = {
    Style.DEFAULT.value: "none",
    Style.SUCCESS.value: "green",
    Style.ERROR.value: "bold red",
    Style.WARNING.value: "yellow",
    Style.INFO.value: "cyan",
    Style.DIM.value: "dim",
    Style.BOLD.value: "bold",
    Style.HEADER.value: "bold blue",
    Style.DEBUG.value: "dim italic",
}

# Label printed before the message, styled separately from it.
_LABELS: dict[Style, str] = {
    Style.SUCCESS: "OK",
    Style.ERROR: "error:",
    Style.WARNING: "warning:",
    Style.DEBUG: "debug:",
}


def debug_enabled() -> bool:
    """True when XR_DEBUG is set to a non-empty, non-zero value."""
    value = os.environ.get(_DEBUG_ENV, "").strip().lower()
    return value not in {"", "0", "false", "no"}


class ConsoleProtocol(Protocol):
    """Styled output sink used by every release component."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None: ...

    def success(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def header(self, message: str) -> None: ...

    def step(self, message: str) -> None:
        """Print a progress line belonging to the current release step."""
        ...

    def debug(self, message: str) -> None:
        """Print a diagnostic line; dropped unless verbose output is on."""
        ...


class RichConsole:
    """ConsoleProtocol backed by a themed rich Console."""

    def __init__(self, *, verbose: bool = False) -> None:
        from rich.console import Console
        from rich.theme import Theme

        self._console = Console(theme=Theme(_THEME), highlight=False)
        self.verbose = verbose or debug_enabled()

    def _labelled(self, style: Style, message: str) -> None:
        from rich.text import Text

        line = Text.assemble((_LABELS[style], style.value), " ", message)
        self._console.print(line)

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self._console.print(message, style=style.value, markup=False)

    def success(self, message: str) -> None:
        self._labelled(Style.SUCCESS, message)

    def error(self, message: str) -> None:
        self._labelled(Style.ERROR, message)

    def warning(self, message: str) -> None:
        self._labelled(Style.WARNING, message)

    def header(self, message: str) -> None:
        self._console.print()
        self.print(message, Style.HEADER)

    def step(self, message: str) -> None:
        from rich.text import Text

        self._console.print(Text.assemble(("|", Style.DIM.value), "  ", message))

    def debug(self, message: str) -> None:
        if self.verbose:
            self.print(f"{_LABELS[Style.DEBUG]} {message}", Style.DEBUG)


@dataclass(frozen=True, slots=True)
class OutputRecord:
    """One captured console line."""

    message: str
    style: Style


@dataclass
class MockConsole:
    """ConsoleProtocol that records lines instead of printing them.

    Labelled lines keep their label ("error: ...", "OK ..."). Debug lines
    are always recorded, whatever the verbosity.
    """

    outputs: list[OutputRecord] = field(default_factory=list)

    def _record(self, message: str, style: Style) -> None:
        label = _LABELS.get(style)
        text = f"{label} {message}" if label is not None else message
        self.outputs.append(OutputRecord(text, style))

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def success(self, message: str) -> None:
        self._record(message, Style.SUCCESS)

    def error(self, message: str) -> None:
        self._record(message, Style.ERROR)

    def warning(self, message: str) -> None:
        self._record(message, Style.WARNING)

    def header(self, message: str) -> None:
        self._record(message, Style.HEADER)

    def step(self, message: str) -> None:
        self._record(message, Style.DEFAULT)

    def debug(self, message: str) -> None:
        self._record(message, Style.DEBUG)

    # Assertion helpers

    def clear(self) -> None:
        self.outputs.clear()

    @property
    def messages(self) -> list[str]:
        return [record.message for record in self.outputs]

    @property
    def text(self) -> str:
        return "\n".join(self.messages)

    def has_error(self) -> bool:
        return self.count(Style.ERROR) > 0

    def find(self, substring: str) -> list[OutputRecord]:
        """Records whose message contains substring."""
        return [record for record in self.outputs if substring in record.message]

    def count(self, style: Style) -> int:
        return sum(record.style is style for record in self.outputs)
