"""Git operations module.

Usage:
    from xr.git import Repository

    repo = Repository(Path("."))
    repo.tag(tag_name="v1.2.0", message="chore: release v1.2.0")
"""

from xr.git.repository import (
    DRY_ENV,
    GitError,
    Repository,
    dry_run_active,
)

__all__ = [
    "DRY_ENV",
    "GitError",
    "Repository",
    "dry_run_active",
]
