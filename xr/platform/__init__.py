"""Process and filesystem helpers."""

from .files import atomic_write_text
from .process import NOT_RUN, ProcessError, run

__all__ = ["NOT_RUN", "ProcessError", "atomic_write_text", "run"]
