"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer

from xr.core.errors import ErrorCode
from xr.output.console import ConsoleProtocol, Style
from xr.release.errors import ReleaseError


def release_error_code(error: ReleaseError) -> ErrorCode:
    match error.kind:
        case "canceled":
            return ErrorCode.CANCELED
        case "no_project_files" | "main_project_missing" | "invalid_config":
            return ErrorCode.USER_ERROR
        case "update_failed" | "step_failed":
            return ErrorCode.RELEASE_ERROR


def exit_on_release_error(error: ReleaseError, console: ConsoleProtocol) -> NoReturn:
    """Report a release error and exit with its code.

    A cancel is not an error from the operator's point of view, so it is
    printed as a plain notice.
    """
    if error.is_cancel:
        console.print(error.message, Style.WARNING)
    else:
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
    raise typer.Exit(code=int(release_error_code(error)))


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
