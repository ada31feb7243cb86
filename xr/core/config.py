"""Typed loading of the optional `xr.toml` release configuration.

Example file:

    [release]
    main = "rust"
    excludes = ["node_modules", "examples"]
    recursive = true
    push = false

    [commit]
    template = "chore(release): %s"
    stage_all = true

    [push]
    follow_tags = true

Every value is optional. Unset values stay None so command line flags and
built-in defaults can be layered on top.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, get_bool, get_str, get_str_list, get_table

__all__ = [
    "CONFIG_FILE_NAME",
    "ConfigError",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILE_NAME = "xr.toml"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """`xr.toml` (or the --config file) could not be read or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Values read from `xr.toml`; None means "not configured"."""

    main: str | None = None
    excludes: tuple[str, ...] | None = None
    recursive: bool | None = None
    yes: bool | None = None
    commit: bool | None = None
    tag: bool | None = None
    push: bool | None = None
    template: str | None = None
    stage_all: bool | None = None
    verify: bool | None = None
    follow_tags: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        release: StrDict = get_table(data, "release") or {}
        commit: StrDict = get_table(data, "commit") or {}
        push: StrDict = get_table(data, "push") or {}

        excludes = get_str_list(release, "excludes")
        # `template` is whitespace-significant, so it is not read through get_str.
        template = commit.get("template")

        return cls(
            main=get_str(release, "main"),
            excludes=tuple(excludes) if excludes is not None else None,
            recursive=get_bool(release, "recursive"),
            yes=get_bool(release, "yes"),
            commit=get_bool(release, "commit"),
            tag=get_bool(release, "tag"),
            push=get_bool(release, "push"),
            template=template if isinstance(template, str) and template else None,
            stage_all=get_bool(commit, "stage_all"),
            verify=get_bool(commit, "verify"),
            follow_tags=get_bool(push, "follow_tags"),
        )


def _read_table(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigError(f"no config file at {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"cannot read {path}: {e}", path=path))

    try:
        return Ok(tomllib.loads(raw))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"{path.name} is not valid TOML: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse release configuration from a TOML file.

    Args:
        path: Path to the TOML file

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    match _read_table(path):
        case Ok(table):
            return Ok(ReleaseConfig.from_dict(table))
        case Err() as failed:
            return failed


def load_config_or_default(root: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load `xr.toml` from the project root if present, else an empty config.

    A file that exists but cannot be parsed is still an error.
    """
    path = root / CONFIG_FILE_NAME
    if not path.is_file():
        return Ok(ReleaseConfig())
    return load_config(path)
