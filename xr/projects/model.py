from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path


class ProjectCategory(StrEnum):
    """Ecosystem a manifest belongs to; `--main` picks one of these."""

    JS = "js"
    RUST = "rust"
    PYTHON = "python"
    DENO = "deno"


MANIFEST_NAMES: dict[str, ProjectCategory] = {
    "package.json": ProjectCategory.JS,
    "Cargo.toml": ProjectCategory.RUST,
    "pyproject.toml": ProjectCategory.PYTHON,
    "deno.json": ProjectCategory.DENO,
    "jsr.json": ProjectCategory.DENO,
}


@dataclass(frozen=True, slots=True)
class ProjectFile:
    """A discovered manifest carrying a version field."""

    path: Path
    category: ProjectCategory

    @property
    def name(self) -> str:
        return self.path.name


@dataclass(frozen=True, slots=True)
class ManifestError:
    """A manifest whose version could not be read or written."""

    path: Path
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"
