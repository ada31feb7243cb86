"""Reading and writing the version field of supported manifests.

JSON manifests (package.json, deno.json, jsr.json) keep their key order and
are rewritten with two-space indentation. TOML manifests (Cargo.toml,
pyproject.toml) are parsed with tomllib for reading, but written by editing
the version line of the owning table in place so comments and layout survive.
"""

from __future__ import annotations

import json
import re
import tomllib
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.core.structured import StrDict, as_str_dict, get_str, get_table
from xr.platform.files import atomic_write_text
from xr.projects.model import ManifestError, ProjectCategory, ProjectFile

__all__ = ["read_version", "write_version"]

# Table that owns the version field, per TOML manifest category.
_TOML_TABLES: dict[ProjectCategory, str] = {
    ProjectCategory.RUST: "package",
    ProjectCategory.PYTHON: "project",
}

_VERSION_LINE = re.compile(
    r"(?m)^(?P<indent>[ \t]*)version\s*=\s*"
    r"(?P<q>[\"'])(?P<value>[^\"']*)(?P=q)[ \t]*(?P<tail>#.*)?$"
)
_TABLE_HEADER = re.compile(r"(?m)^[ \t]*\[")


def read_version(project: ProjectFile) -> Result[str | None, ManifestError]:
    """Return the manifest's version, Ok(None) when it has none yet."""
    if project.category in _TOML_TABLES:
        return _read_toml_version(project)
    return _read_json_version(project)


def write_version(version: str, project: ProjectFile) -> Result[Path, ManifestError]:
    """Set the manifest's version and return its path."""
    if project.category in _TOML_TABLES:
        return _write_toml_version(project, version)
    return _write_json_version(project, version)


def _read_text(path: Path) -> Result[str, ManifestError]:
    try:
        return Ok(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ManifestError(path, f"failed to read {path.name}: {e}"))


def _load_json(path: Path) -> Result[StrDict, ManifestError]:
    text = _read_text(path)
    if isinstance(text, Err):
        return text

    try:
        obj: object = json.loads(text.value)
    except json.JSONDecodeError as e:
        return Err(ManifestError(path, f"invalid JSON in {path.name}: {e}"))

    data = as_str_dict(obj)
    if data is None:
        return Err(ManifestError(path, f"invalid JSON root in {path.name}"))
    return Ok(data)


def _read_json_version(project: ProjectFile) -> Result[str | None, ManifestError]:
    data = _load_json(project.path)
    if isinstance(data, Err):
        return data
    return Ok(get_str(data.value, "version"))


def _write_json_version(project: ProjectFile, version: str) -> Result[Path, ManifestError]:
    path = project.path
    loaded = _load_json(path)
    if isinstance(loaded, Err):
        return loaded
    data = loaded.value

    if "version" in data:
        data["version"] = version
    else:
        # New field goes right after "name" when there is one.
        updated: StrDict = {}
        for key, value in data.items():
            updated[key] = value
            if key == "name":
                updated["version"] = version
        if "version" not in updated:
            updated["version"] = version
        data = updated

    try:
        atomic_write_text(path, json.dumps(data, indent=2, ensure_ascii=False) + "\n")
    except OSError as e:
        return Err(ManifestError(path, f"failed to write {path.name}: {e}"))
    return Ok(path)


def _load_toml(path: Path) -> Result[tuple[str, StrDict], ManifestError]:
    text = _read_text(path)
    if isinstance(text, Err):
        return text
    try:
        return Ok((text.value, tomllib.loads(text.value)))
    except tomllib.TOMLDecodeError as e:
        return Err(ManifestError(path, f"invalid TOML in {path.name}: {e}"))


def _read_toml_version(project: ProjectFile) -> Result[str | None, ManifestError]:
    loaded = _load_toml(project.path)
    if isinstance(loaded, Err):
        return loaded
    _, data = loaded.value
    table = get_table(data, _TOML_TABLES[project.category]) or {}
    return Ok(get_str(table, "version"))


def _table_span(text: str, table: str) -> tuple[int, int] | None:
    """Character span of a table's body (after its header line)."""
    header = re.search(rf"(?m)^[ \t]*\[{re.escape(table)}\][ \t]*(#.*)?$", text)
    if header is None:
        return None
    start = header.end()
    nxt = _TABLE_HEADER.search(text, start)
    end = nxt.start() if nxt is not None else len(text)
    return (start, end)


def _write_toml_version(project: ProjectFile, version: str) -> Result[Path, ManifestError]:
    path = project.path
    table_name = _TOML_TABLES[project.category]

    loaded = _load_toml(path)
    if isinstance(loaded, Err):
        return loaded
    text, data = loaded.value

    table = get_table(data, table_name)
    if table is None:
        return Err(ManifestError(path, f"missing [{table_name}] section in {path.name}"))
    if isinstance(table.get("version"), dict):
        return Err(ManifestError(path, f"{path.name} inherits its version from the workspace"))
    dynamic = table.get("dynamic")
    if isinstance(dynamic, list) and "version" in dynamic:
        return Err(ManifestError(path, f"{path.name} declares a dynamic version"))

    span = _table_span(text, table_name)
    if span is None:
        return Err(ManifestError(path, f"[{table_name}] must be a standard table in {path.name}"))
    start, end = span
    body = text[start:end]

    m = _VERSION_LINE.search(body)
    if m is not None:
        tail = f" {m.group('tail')}" if m.group("tail") else ""
        line = f'{m.group("indent")}version = "{version}"{tail}'
        body = body[: m.start()] + line + body[m.end() :]
    else:
        name = re.search(r"(?m)^[ \t]*name\s*=.*$", body)
        at = name.end() if name is not None else 0
        body = body[:at] + f'\nversion = "{version}"' + body[at:]

    try:
        atomic_write_text(path, text[:start] + body + text[end:])
    except OSError as e:
        return Err(ManifestError(path, f"failed to write {path.name}: {e}"))
    return Ok(path)
