"""Process exit codes.

The release driver maps every way a run can end onto one of these codes.
Values are part of the CLI contract and should remain stable.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the `xr` command.

    - 0: Release finished
    - 1: Setup error (no project files, main project file missing, bad config)
    - 3: Release failed (a file update or a git step failed)
    - 130: Operator cancelled an interactive prompt
    """

    OK = 0
    USER_ERROR = 1
    RELEASE_ERROR = 3
    CANCELED = 130

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
