"""Prompt contracts used by the release run.

Prompt answers are explicit variants. A Cancelled answer has to be matched
like any other, so no call site can mistake a cancel for "no".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, TypeAlias


@dataclass(frozen=True, slots=True)
class Confirmed:
    value: bool


@dataclass(frozen=True, slots=True)
class Chosen:
    version: str


@dataclass(frozen=True, slots=True)
class Cancelled:
    pass


CANCELLED = Cancelled()

ConfirmAnswer: TypeAlias = Confirmed | Cancelled
VersionAnswer: TypeAlias = Chosen | Cancelled


class Prompter(Protocol):
    def choose_version(self, current: str) -> VersionAnswer:
        """Ask for the next version, seeded with the current one ("" if unknown)."""
        ...

    def confirm(self, message: str) -> ConfirmAnswer:
        """Ask a yes/no question."""
        ...
