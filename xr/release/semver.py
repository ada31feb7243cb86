from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

BumpKind = Literal["patch", "minor", "major", "prepatch", "preminor", "premajor", "prerelease"]

BUMP_KINDS: tuple[BumpKind, ...] = (
    "patch",
    "minor",
    "major",
    "prepatch",
    "preminor",
    "premajor",
    "prerelease",
)

DEFAULT_PREID = "beta"

_IDENT = r"(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    rf"(?:-({_IDENT}(?:\.{_IDENT})*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)


def is_valid_version(value: str | None) -> bool:
    """True for a well-formed SemVer 2.0.0 string (no leading "v")."""
    if not value:
        return False
    return _SEMVER_RE.match(value) is not None


@dataclass(frozen=True, slots=True)
class SemVer:
    major: int
    minor: int
    patch: int
    prerelease: tuple[str, ...] = ()

    @classmethod
    def parse(cls, value: str) -> SemVer | None:
        """Parse a version; build metadata is dropped, invalid input gives None."""
        m = _SEMVER_RE.match(value)
        if m is None:
            return None
        pre = tuple(m.group(4).split(".")) if m.group(4) else ()
        return cls(int(m.group(1)), int(m.group(2)), int(m.group(3)), pre)

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            return f"{core}-{'.'.join(self.prerelease)}"
        return core

    def bump(self, kind: BumpKind, preid: str = DEFAULT_PREID) -> SemVer:
        """Next version for a bump kind.

        A prerelease bumped by its own kind is released as-is
        (1.3.0-beta.2 minor -> 1.3.0), following npm's semantics.
        """
        match kind:
            case "major":
                if self.prerelease and self.minor == 0 and self.patch == 0:
                    return SemVer(self.major, 0, 0)
                return SemVer(self.major + 1, 0, 0)
            case "minor":
                if self.prerelease and self.patch == 0:
                    return SemVer(self.major, self.minor, 0)
                return SemVer(self.major, self.minor + 1, 0)
            case "patch":
                if self.prerelease:
                    return SemVer(self.major, self.minor, self.patch)
                return SemVer(self.major, self.minor, self.patch + 1)
            case "premajor":
                return SemVer(self.major + 1, 0, 0, (preid, "0"))
            case "preminor":
                return SemVer(self.major, self.minor + 1, 0, (preid, "0"))
            case "prepatch":
                return SemVer(self.major, self.minor, self.patch + 1, (preid, "0"))
            case "prerelease":
                return self._next_prerelease(preid)
            case _:
                raise AssertionError(f"unexpected bump kind: {kind}")

    def _next_prerelease(self, preid: str) -> SemVer:
        if not self.prerelease:
            return self.bump("prepatch", preid)
        if self.prerelease[0] != preid:
            return SemVer(self.major, self.minor, self.patch, (preid, "0"))
        last = self.prerelease[-1]
        if last.isdigit():
            pre = (*self.prerelease[:-1], str(int(last) + 1))
        else:
            pre = (*self.prerelease, "0")
        return SemVer(self.major, self.minor, self.patch, pre)


@dataclass(frozen=True, slots=True)
class VersionChoice:
    kind: BumpKind
    version: str


def next_versions(current: str, preid: str = DEFAULT_PREID) -> list[VersionChoice]:
    """Candidate next versions for every bump kind.

    An empty or unparsable current version is treated as 0.0.0.
    """
    base = SemVer.parse(current) if current else None
    if base is None:
        base = SemVer(0, 0, 0)
    return [VersionChoice(kind, str(base.bump(kind, preid))) for kind in BUMP_KINDS]
