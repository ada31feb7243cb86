"""Error payload for the release run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "no_project_files",
    "main_project_missing",
    "invalid_config",
    "canceled",
    "update_failed",
    "step_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical release error.

    `kind` decides the exit code; `message` and `hint` are shown to the
    operator as-is.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    @property
    def is_cancel(self) -> bool:
        return self.kind == "canceled"

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def canceled() -> ReleaseError:
    return ReleaseError(kind="canceled", message="User cancel")
