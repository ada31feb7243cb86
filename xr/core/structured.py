"""Narrowing helpers for decoded manifest and config data.

`json.loads` and `tomllib.loads` hand back plain objects. Values are read
through these helpers so a wrongly typed field reads as missing instead of
raising deep inside the release run.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeGuard, cast

StrDict = dict[str, object]


def is_str_dict(obj: object) -> TypeGuard[StrDict]:
    return isinstance(obj, dict) and all(
        isinstance(key, str) for key in cast(dict[object, object], obj)
    )


def as_str_dict(obj: object) -> StrDict | None:
    return obj if is_str_dict(obj) else None


def get_table(data: Mapping[str, object], key: str) -> StrDict | None:
    """The nested table at key, e.g. `[package]` of a Cargo.toml."""
    return as_str_dict(data.get(key))


def get_str(data: Mapping[str, object], key: str) -> str | None:
    """A stripped, non-empty string; anything else reads as None."""
    value = data.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_bool(data: Mapping[str, object], key: str) -> bool | None:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def get_str_list(data: Mapping[str, object], key: str) -> list[str] | None:
    """A list made only of strings; None when absent or mixed."""
    value = data.get(key)
    if not isinstance(value, list):
        return None
    items = cast(list[object], value)
    strings = [item for item in items if isinstance(item, str)]
    return strings if len(strings) == len(items) else None
