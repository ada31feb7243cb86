"""Git operations used by the release steps.

Repository wraps the three mutating commands a release needs (commit, tag,
push). Every method returns a Result; none of them raise on git failure.

Dry run: when the caller passes dry=True, or the process-wide DRY
environment variable is "true", the command is echoed through the console
and never executed.

Usage:
    repo = Repository(Path("."), console=console)

    match repo.commit(message="chore: release v1.2.0", files=[Path("package.json")]):
        case Ok(_):
            ...
        case Err(e):
            console.error(f"{e.command}: {e.message}")
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.output.console import ConsoleProtocol
from xr.platform.process import ProcessError
from xr.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

DRY_ENV = "DRY"

__all__ = [
    "DRY_ENV",
    "GitError",
    "Repository",
    "dry_run_active",
]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "commit")
        message: Error message, usually git's stderr
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


def dry_run_active(dry: bool = False) -> bool:
    """True if the caller asked for a dry run or the DRY env flag is set."""
    return dry or os.environ.get(DRY_ENV, "").strip().lower() == "true"


class Repository:
    """Git repository the release is committed, tagged and pushed from.

    Attributes:
        path: Working directory git is run in
    """

    def __init__(self, path: Path, *, console: ConsoleProtocol | None = None) -> None:
        self.path = path
        self._console = console

    def commit(
        self,
        *,
        message: str,
        files: Sequence[Path],
        stage_all: bool = False,
        verify: bool = True,
        dry: bool = False,
    ) -> Result[str, GitError]:
        """Stage the release files and commit them.

        With stage_all every change in the working tree is staged
        (`git add -A`); otherwise only the given files are.
        """
        add_args: list[str] | None = None
        if stage_all:
            add_args = ["add", "-A"]
        elif files:
            add_args = ["add", "--", *(self._relative(f) for f in files)]

        if add_args is not None:
            added = self._git(add_args, dry=dry)
            if isinstance(added, Err):
                return added

        commit_args = ["commit", "-m", message]
        if not verify:
            commit_args.append("--no-verify")
        return self._git(commit_args, dry=dry)

    def tag(self, *, tag_name: str, message: str, dry: bool = False) -> Result[str, GitError]:
        """Create an annotated tag on HEAD."""
        return self._git(["tag", "-a", tag_name, "-m", message], dry=dry)

    def push(self, *, follow_tags: bool = True, dry: bool = False) -> Result[str, GitError]:
        """Push the current branch, and reachable annotated tags with follow_tags."""
        args = ["push"]
        if follow_tags:
            args.append("--follow-tags")
        return self._git(args, dry=dry)

    def _relative(self, file: Path) -> str:
        try:
            return str(file.resolve().relative_to(self.path.resolve()))
        except ValueError:
            return str(file)

    def _git(self, args: list[str], *, dry: bool) -> Result[str, GitError]:
        command = args[0]
        if dry_run_active(dry):
            if self._console is not None:
                self._console.print(f"dry-run: git {' '.join(args)}")
            return Ok("")

        timeout = _GIT_NETWORK_TIMEOUT_SECONDS if command == "push" else _GIT_TIMEOUT_SECONDS
        result = run_process(["git", *args], cwd=self.path, timeout=timeout)
        match result:
            case Err(e):
                return Err(_to_git_error(command, e))
            case Ok(stdout):
                return Ok(stdout.strip())


def _to_git_error(command: str, error: ProcessError) -> GitError:
    return GitError(
        command=command,
        message=error.detail or f"git {command} failed",
        returncode=error.returncode,
    )
