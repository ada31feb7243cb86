from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, TypeVar

from xr.core.config import ReleaseConfig
from xr.projects.discovery import DEFAULT_EXCLUDES
from xr.projects.model import ProjectCategory

StepName = Literal["commit", "tag", "push"]

DEFAULT_TEMPLATE = "chore: release v%s"
DEFAULT_MAIN = ProjectCategory.JS.value


@dataclass(frozen=True, slots=True)
class CommitOptions:
    template: str = DEFAULT_TEMPLATE
    stage_all: bool = False
    verify: bool = True


@dataclass(frozen=True, slots=True)
class PushOptions:
    follow_tags: bool = True


@dataclass(frozen=True, slots=True)
class ReleaseOptions:
    """Operator-supplied configuration for one release run.

    commit/tag/push are tri-state: None means "ask the operator", True/False
    are pre-set answers. The confirmation gate returns a copy with the
    resolved answers filled in.
    """

    dir: Path = field(default_factory=Path.cwd)
    excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    recursive: bool = False
    main: str = DEFAULT_MAIN
    version: str | None = None
    dry: bool = False
    yes: bool = False
    commit: bool | None = None
    tag: bool | None = None
    push: bool | None = None
    commit_options: CommitOptions = field(default_factory=CommitOptions)
    push_options: PushOptions = field(default_factory=PushOptions)

    def step_flag(self, name: StepName) -> bool | None:
        match name:
            case "commit":
                return self.commit
            case "tag":
                return self.tag
            case "push":
                return self.push


T = TypeVar("T")


def _pick(flag: T | None, configured: T | None, default: T) -> T:
    if flag is not None:
        return flag
    if configured is not None:
        return configured
    return default


def merge_options(
    *,
    config: ReleaseConfig,
    dir: Path,
    excludes: tuple[str, ...] | None = None,
    recursive: bool | None = None,
    main: str | None = None,
    version: str | None = None,
    dry: bool = False,
    yes: bool | None = None,
    commit: bool | None = None,
    tag: bool | None = None,
    push: bool | None = None,
    template: str | None = None,
    stage_all: bool | None = None,
    verify: bool | None = None,
    follow_tags: bool | None = None,
) -> ReleaseOptions:
    """Layer command line flags over `xr.toml` over built-in defaults.

    Every flag argument uses None for "not given on the command line".
    Excludes from the flag or the file are added to DEFAULT_EXCLUDES, never
    substituted for them.
    """
    return ReleaseOptions(
        dir=dir,
        excludes=(*DEFAULT_EXCLUDES, *_pick(excludes, config.excludes, ())),
        recursive=_pick(recursive, config.recursive, False),
        main=_pick(main, config.main, DEFAULT_MAIN),
        version=version,
        dry=dry,
        yes=_pick(yes, config.yes, False),
        commit=commit if commit is not None else config.commit,
        tag=tag if tag is not None else config.tag,
        push=push if push is not None else config.push,
        commit_options=CommitOptions(
            template=_pick(template, config.template, DEFAULT_TEMPLATE),
            stage_all=_pick(stage_all, config.stage_all, False),
            verify=_pick(verify, config.verify, True),
        ),
        push_options=PushOptions(
            follow_tags=_pick(follow_tags, config.follow_tags, True),
        ),
    )
