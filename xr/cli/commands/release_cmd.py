from __future__ import annotations

from pathlib import Path

import typer

from xr import __version__
from xr.cli.commands._helpers import exit_on_release_error, exit_with_code
from xr.cli.context import build_context
from xr.core.config import load_config, load_config_or_default
from xr.core.errors import ErrorCode
from xr.core.result import Err
from xr.release.errors import ReleaseError
from xr.release.options import merge_options
from xr.release.run import ReleaseRun
from xr.release.tasks import TaskStatus


def release(
    directory: Path = typer.Option(Path("."), "--dir", "-d", help="Project root"),
    excludes: list[str] | None = typer.Option(
        None,
        "--excludes",
        "-x",
        help="Glob excluded from project discovery (repeatable)",
    ),
    recursive: bool | None = typer.Option(
        None, "--recursive/--no-recursive", "-r", help="Search project files recursively"
    ),
    main: str | None = typer.Option(
        None, "--main", help="Project category the current version is read from (js, rust, ...)"
    ),
    version: str | None = typer.Option(
        None, "--version", "-v", help="Next version; skips the version prompt when valid"
    ),
    dry: bool = typer.Option(False, "--dry", help="Do not commit, tag or push"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Answer yes to every step"),
    commit: bool | None = typer.Option(None, "--commit/--no-commit", help="Commit the release"),
    tag: bool | None = typer.Option(None, "--tag/--no-tag", help="Create the release tag"),
    push: bool | None = typer.Option(None, "--push/--no-push", help="Push to the remote"),
    message: str | None = typer.Option(
        None, "--message", "-m", help='Commit/tag message template, "%s" is the version'
    ),
    stage_all: bool | None = typer.Option(
        None, "--stage-all/--no-stage-all", help="Stage every change, not only project files"
    ),
    verify: bool | None = typer.Option(
        None, "--verify/--no-verify", help="Run git commit hooks"
    ),
    follow_tags: bool | None = typer.Option(
        None, "--follow-tags/--no-follow-tags", help="Push annotated tags with the branch"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (default: <dir>/xr.toml if present)"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Print debug output"),
    about: bool = typer.Option(False, "--about", help="Show xr version and exit."),
) -> None:
    """Bump project versions, then optionally commit, tag and push.

    Steps not pre-set with a flag (or --yes) are confirmed interactively.
    """
    if about:
        typer.echo(__version__)
        exit_with_code(int(ErrorCode.OK))

    ctx = build_context(verbose=verbose)

    try:
        root = directory.expanduser().resolve()
    except OSError as e:
        ctx.console.error(f"invalid --dir: {e}")
        exit_with_code(int(ErrorCode.USER_ERROR))
    if not root.is_dir():
        ctx.console.error(f"--dir '{root}' is not a directory")
        exit_with_code(int(ErrorCode.USER_ERROR))

    loaded = load_config(config) if config is not None else load_config_or_default(root)
    if isinstance(loaded, Err):
        exit_on_release_error(
            ReleaseError(kind="invalid_config", message=loaded.error.message),
            ctx.console,
        )

    options = merge_options(
        config=loaded.value,
        dir=root,
        excludes=tuple(excludes) if excludes else None,
        recursive=recursive,
        main=main,
        version=version,
        dry=dry,
        yes=True if yes else None,
        commit=commit,
        tag=tag,
        push=push,
        template=message,
        stage_all=stage_all,
        verify=verify,
        follow_tags=follow_tags,
    )

    result = ReleaseRun(options, console=ctx.console, prompter=ctx.prompter).run()
    if isinstance(result, Err):
        exit_on_release_error(result.error, ctx.console)

    if result.value.status is TaskStatus.FAILED:
        exit_with_code(int(ErrorCode.RELEASE_ERROR))
