"""Arrow-key single choice for the version prompt.

Draws the option list below the cursor and redraws it in place on every key.
Only usable on a TTY; callers fall back to a numbered prompt elsewhere.
"""

from __future__ import annotations

import os
import shutil
import sys
from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

Key = Literal["up", "down", "enter", "cancel", "other"]

# Single characters, shared by both platforms.
_PLAIN_KEYS: dict[str, Key] = {
    "\r": "enter",
    "\n": "enter",
    "q": "cancel",
    "Q": "cancel",
    "\x03": "cancel",  # Ctrl-C in raw mode
    "\x04": "cancel",  # Ctrl-D
    "k": "up",
    "K": "up",
    "j": "down",
    "J": "down",
}
# Final byte of an ANSI cursor sequence (ESC [ x).
_ANSI_ARROWS: dict[str, Key] = {"A": "up", "B": "down"}
# Second code of a Windows console extended key.
_WIN_ARROWS: dict[str, Key] = {"H": "up", "P": "down"}

_HINT = "Up/Down + Enter to select, q to cancel"


@dataclass(frozen=True, slots=True)
class SelectorOption(Generic[T]):
    value: T
    label: str
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class SelectorResult(Generic[T]):
    action: Literal["select", "cancel"]
    value: T | None
    index: int


def is_interactive_terminal() -> bool:
    return sys.stdin.isatty() and sys.stdout.isatty()


def _sgr(text: str, codes: str) -> str:
    if os.getenv("NO_COLOR") is not None or os.getenv("TERM", "").lower() == "dumb":
        return text
    return f"\x1b[{codes}m{text}\x1b[0m"


def _read_key_windows() -> Key:
    import msvcrt

    ch = msvcrt.getwch()
    if ch in ("\x00", "\xe0"):
        return _WIN_ARROWS.get(msvcrt.getwch(), "other")
    if ch == "\x1b":
        return "cancel"
    return _PLAIN_KEYS.get(ch, "other")


def _read_key_posix() -> Key:
    import termios
    import tty

    fd = sys.stdin.fileno()
    saved = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch != "\x1b":
            return _PLAIN_KEYS.get(ch, "other")
        # A lone Esc (or an unknown sequence) cancels.
        if sys.stdin.read(1) != "[":
            return "cancel"
        return _ANSI_ARROWS.get(sys.stdin.read(1), "cancel")
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_key() -> Key:
    return _read_key_windows() if os.name == "nt" else _read_key_posix()


def _fit(text: str, width: int) -> str:
    if len(text) > width:
        return text[: max(0, width - 3)] + "..."
    return text


def _render(
    title: str, subtitle: str | None, options: list[SelectorOption[T]], index: int
) -> list[str]:
    width = max(40, min(100, shutil.get_terminal_size((80, 24)).columns)) - 4
    label_width = max(len(option.label) for option in options)

    lines = [_sgr(title, "1;96")]
    if subtitle is not None:
        lines.append(_sgr(subtitle, "2"))
    for i, option in enumerate(options):
        row = _fit(f"{option.label:<{label_width}}  {option.detail or ''}".rstrip(), width)
        lines.append(_sgr(f"> {row}", "1;36") if i == index else f"  {row}")
    lines.append(_sgr(_HINT, "2"))
    return lines


def select_one(
    *,
    title: str,
    options: list[SelectorOption[T]],
    subtitle: str | None = None,
    initial_index: int = 0,
) -> SelectorResult[T]:
    """Let the operator pick one option; q, Esc or Ctrl-C cancels."""
    if not options:
        raise ValueError("selector needs at least one option")
    if not is_interactive_terminal():
        raise RuntimeError("selector needs an interactive terminal")

    index = min(max(initial_index, 0), len(options) - 1)
    drawn = 0
    while True:
        if drawn:
            # Back to the first drawn line, then clear to the end of screen.
            sys.stdout.write(f"\x1b[{drawn}F\x1b[J")
        lines = _render(title, subtitle, options, index)
        sys.stdout.write("\n".join(lines) + "\n")
        sys.stdout.flush()
        drawn = len(lines)

        match _read_key():
            case "up":
                index = (index - 1) % len(options)
            case "down":
                index = (index + 1) % len(options)
            case "enter":
                return SelectorResult("select", options[index].value, index)
            case "cancel":
                return SelectorResult("cancel", None, index)
            case _:
                pass
