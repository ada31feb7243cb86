"""Blocking subprocess runner for the git steps.

`run` never raises for a failing command: a non-zero exit, a timeout and a
missing executable all come back as Err(ProcessError).

    match run(["git", "tag", "-a", "v1.0.0", "-m", "release"], cwd=root, timeout=30):
        case Ok(stdout):
            ...
        case Err(error):
            console.error(error.detail)
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from xr.core.result import Err, Ok, Result

__all__ = ["NOT_RUN", "ProcessError", "run"]

# Return code reported when the process never ran to completion.
NOT_RUN = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that exited non-zero, timed out or could not be started."""

    command: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"

    @property
    def detail(self) -> str:
        """Best available explanation: stderr, then stdout, then the summary."""
        return self.stderr.strip() or self.stdout.strip() or str(self)


def run(
    cmd: Sequence[str], cwd: Path, *, timeout: float | None = None
) -> Result[str, ProcessError]:
    """Run cmd in cwd and return its stdout when it exits 0.

    Output is decoded as UTF-8, undecodable bytes are replaced.
    """
    argv = tuple(cmd)
    try:
        proc = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return Err(ProcessError(argv, NOT_RUN, stderr=f"Command timed out after {timeout}s"))
    except OSError as e:
        return Err(ProcessError(argv, NOT_RUN, stderr=str(e)))

    if proc.returncode != 0:
        return Err(ProcessError(argv, proc.returncode, proc.stdout, proc.stderr))
    return Ok(proc.stdout)
