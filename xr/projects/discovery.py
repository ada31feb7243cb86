"""Project file discovery.

Finds the manifests under a project root. Without `recursive` only the root
directory itself is searched. Exclusion patterns are fnmatch globs tested
against each path component and against the root-relative POSIX path, so
both `node_modules` and `packages/legacy/*` work.

Usage:
    files = find_project_files(Path("."), excludes=("node_modules",), recursive=True)
    for f in files:
        print(f.category, f.path)
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path

from xr.projects.model import MANIFEST_NAMES, ProjectFile

__all__ = ["DEFAULT_EXCLUDES", "find_project_files", "is_excluded"]

DEFAULT_EXCLUDES: tuple[str, ...] = (
    "node_modules",
    ".git",
    "target",
    "dist",
    "build",
    ".venv",
)


def is_excluded(relative: Path, excludes: Iterable[str]) -> bool:
    """True if the root-relative path matches any exclusion pattern."""
    posix = relative.as_posix()
    for pattern in excludes:
        if fnmatch(posix, pattern):
            return True
        if any(fnmatch(part, pattern) for part in relative.parts):
            return True
    return False


def find_project_files(
    root: Path,
    excludes: Iterable[str] = DEFAULT_EXCLUDES,
    recursive: bool = False,
) -> list[ProjectFile]:
    """Find supported manifests under root, sorted by relative path.

    Returns an empty list if root is not a directory.
    """
    if not root.is_dir():
        return []

    patterns = tuple(excludes)
    found: list[ProjectFile] = []

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)
        rel_dir = current.relative_to(root)

        if recursive:
            # Pruning in place keeps os.walk out of excluded trees.
            dirnames[:] = sorted(d for d in dirnames if not is_excluded(rel_dir / d, patterns))
        else:
            dirnames[:] = []

        for name in filenames:
            category = MANIFEST_NAMES.get(name)
            if category is None:
                continue
            if is_excluded(rel_dir / name, patterns):
                continue
            found.append(ProjectFile(path=current / name, category=category))

    return sorted(found, key=lambda f: f.path.relative_to(root).as_posix())
