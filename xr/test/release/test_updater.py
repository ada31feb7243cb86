from __future__ import annotations

import threading
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.output.console import MockConsole
from xr.projects.model import ManifestError, ProjectCategory, ProjectFile
from xr.release.updater import ProjectVersionUpdater


def _files(root: Path, *names: str) -> list[ProjectFile]:
    return [ProjectFile(root / n, ProjectCategory.JS) for n in names]


def test_partial_failure_keeps_successful_paths(tmp_path: Path) -> None:
    files = _files(tmp_path, "a/package.json", "b/package.json", "c/package.json")

    def write(version: str, project: ProjectFile) -> Result[Path, ManifestError]:
        if project.path.parent.name == "b":
            return Err(ManifestError(project.path, "permission denied"))
        return Ok(project.path)

    console = MockConsole()
    report = ProjectVersionUpdater(root=tmp_path, console=console, write=write).apply(
        "1.0.0", files
    )

    assert report.modified == (files[0].path, files[2].path)
    assert [f.path for f in report.failures] == [files[1].path]
    assert report.ok is False
    assert console.find("upgrade to 1.0.0 for a/package.json")
    assert console.find("upgrade to 1.0.0 for c/package.json")
    assert console.find("b/package.json: permission denied")


def test_raising_writer_is_reported_per_file(tmp_path: Path) -> None:
    files = _files(tmp_path, "a.json", "b.json")

    def write(version: str, project: ProjectFile) -> Result[Path, ManifestError]:
        if project.path.name == "a.json":
            raise OSError("read-only file system")
        return Ok(project.path)

    report = ProjectVersionUpdater(root=tmp_path, console=MockConsole(), write=write).apply(
        "1.0.0", files
    )

    assert report.modified == (files[1].path,)
    assert report.failures[0].message == "read-only file system"


def test_all_files_are_launched_together(tmp_path: Path) -> None:
    files = _files(tmp_path, "a.json", "b.json", "c.json")
    barrier = threading.Barrier(len(files), timeout=5)

    def write(version: str, project: ProjectFile) -> Result[Path, ManifestError]:
        # Deadlocks (then times out) unless every write is in flight at once.
        barrier.wait()
        return Ok(project.path)

    report = ProjectVersionUpdater(root=tmp_path, console=MockConsole(), write=write).apply(
        "1.0.0", files
    )

    assert report.ok
    assert len(report.modified) == 3


def test_no_files(tmp_path: Path) -> None:
    report = ProjectVersionUpdater(root=tmp_path, console=MockConsole()).apply("1.0.0", [])
    assert report.ok
    assert report.modified == ()


def test_real_manifests(tmp_path: Path) -> None:
    (tmp_path / "package.json").write_text('{"name": "a", "version": "0.1.0"}', encoding="utf-8")
    cargo = '[package]\nname = "a"\nversion = "0.1.0"\n'
    (tmp_path / "Cargo.toml").write_text(cargo, encoding="utf-8")
    files = [
        ProjectFile(tmp_path / "Cargo.toml", ProjectCategory.RUST),
        ProjectFile(tmp_path / "package.json", ProjectCategory.JS),
    ]

    report = ProjectVersionUpdater(root=tmp_path, console=MockConsole()).apply("0.2.0", files)

    assert report.ok
    assert '"version": "0.2.0"' in (tmp_path / "package.json").read_text(encoding="utf-8")
    assert 'version = "0.2.0"' in (tmp_path / "Cargo.toml").read_text(encoding="utf-8")
