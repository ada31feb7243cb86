"""Ok/Err values returned across every module seam.

Collaborators (manifests, git, prompts) and release steps report failure as
an Err payload instead of raising. Only the CLI driver turns an Err into a
process exit.

    match write_version("1.2.0", project):
        case Ok(path):
            modified.append(path)
        case Err(failure):
            console.error(str(failure))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def unwrap(self) -> None:
        """Raise ValueError carrying the error payload."""
        raise ValueError(f"unwrap on Err: {self.error}")

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
