"""Atomic manifest writes."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

__all__ = ["atomic_write_text"]


def atomic_write_text(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Replace a manifest's content without leaving a half-written file behind.

    The temp file lives next to the target so the final rename never crosses
    filesystems. An existing target's permission bits are carried over.
    Raises OSError when the directory is not writable.
    """
    mode = path.stat().st_mode & 0o7777 if path.exists() else None
    fd, name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".xr-tmp", dir=path.parent)
    staged = Path(name)
    try:
        with open(fd, "w", encoding=encoding, newline="") as out:
            out.write(content)
            out.flush()
            os.fsync(out.fileno())
        if mode is not None:
            staged.chmod(mode)
        staged.replace(path)
    except BaseException:
        staged.unlink(missing_ok=True)
        raise
