"""Current and next version resolution.

The current version is read from the main project file: the shallowest
discovered manifest of the category named by `--main`. The next version
comes from `--version` when it is valid SemVer, otherwise from the operator.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.output.console import ConsoleProtocol
from xr.projects import ManifestError, ProjectFile, find_project_files, read_version
from xr.release.errors import ReleaseError, canceled
from xr.release.options import ReleaseOptions
from xr.release.prompts import Cancelled, Chosen, Prompter
from xr.release.semver import is_valid_version

DiscoverProjects = Callable[[Path, Iterable[str], bool], list[ProjectFile]]
ReadVersion = Callable[[ProjectFile], Result[str | None, ManifestError]]


@dataclass(frozen=True, slots=True)
class ResolvedVersion:
    current: str
    next: str
    main_file: ProjectFile


def select_main_file(
    files: list[ProjectFile], *, main: str, root: Path
) -> ProjectFile | None:
    candidates = [f for f in files if f.category == main]
    if not candidates:
        return None
    return min(
        candidates,
        key=lambda f: (len(f.path.relative_to(root).parts), f.path.as_posix()),
    )


class VersionResolver:
    def __init__(
        self,
        *,
        prompter: Prompter,
        console: ConsoleProtocol,
        discover: DiscoverProjects = find_project_files,
        read: ReadVersion = read_version,
    ) -> None:
        self._prompter = prompter
        self._console = console
        self._discover = discover
        self._read = read

    def resolve(self, options: ReleaseOptions) -> Result[ResolvedVersion, ReleaseError]:
        """Determine (current, next) for the run.

        Returns:
            Ok(ResolvedVersion), or Err with kind "no_project_files",
            "main_project_missing" or "canceled".
        """
        files = self._discover(options.dir, options.excludes, options.recursive)
        if not files:
            return Err(
                ReleaseError(
                    kind="no_project_files",
                    message=f"can't find any project file in {options.dir}",
                    hint="check --dir and --excludes, or pass --recursive",
                )
            )

        main_file = select_main_file(files, main=options.main, root=options.dir)
        if main_file is None:
            found = sorted({f.category.value for f in files})
            return Err(
                ReleaseError(
                    kind="main_project_missing",
                    message=f"can't find {options.main} project file in {options.dir}",
                    hint=f"found: {', '.join(found)}; pick one with --main",
                )
            )

        current = self._current_version(main_file)
        self._console.debug(f"main project file {main_file.path} at {current or '<none>'}")

        if options.version is not None:
            if is_valid_version(options.version):
                return Ok(ResolvedVersion(current, options.version, main_file))
            self._console.warning(f"ignoring invalid --version {options.version!r}")

        match self._prompter.choose_version(current):
            case Cancelled():
                return Err(canceled())
            case Chosen(version=version):
                return Ok(ResolvedVersion(current, version, main_file))

    def _current_version(self, main_file: ProjectFile) -> str:
        match self._read(main_file):
            case Ok(value):
                return value or ""
            case Err(e):
                self._console.warning(f"can't read current version: {e}")
                return ""
