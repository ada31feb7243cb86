"""Fan-out of the new version to every discovered project file.

All writes are submitted to a thread pool together and joined before the
update is considered done. A failing file never stops its siblings; every
file ends up either in `modified` or in `failures`.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.output.console import ConsoleProtocol
from xr.projects import ManifestError, ProjectFile, write_version

WriteVersion = Callable[[str, ProjectFile], Result[Path, ManifestError]]

_MAX_WORKERS = 8


@dataclass(frozen=True, slots=True)
class UpdateReport:
    """Per-run result of the version fan-out.

    Attributes:
        modified: Paths written successfully, in discovery order
        failures: One error per file that could not be written
    """

    modified: tuple[Path, ...] = ()
    failures: tuple[ManifestError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures


class ProjectVersionUpdater:
    def __init__(
        self,
        *,
        root: Path,
        console: ConsoleProtocol,
        write: WriteVersion = write_version,
        max_workers: int = _MAX_WORKERS,
    ) -> None:
        self._root = root
        self._console = console
        self._write = write
        self._max_workers = max_workers

    def apply(self, version: str, files: Sequence[ProjectFile]) -> UpdateReport:
        if not files:
            return UpdateReport()

        results: dict[int, Result[Path, ManifestError]] = {}
        workers = max(1, min(self._max_workers, len(files)))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="xr-update") as pool:
            futures: dict[Future[Result[Path, ManifestError]], int] = {
                pool.submit(self._write_one, version, project): index
                for index, project in enumerate(files)
            }
            for future in as_completed(futures):
                index = futures[future]
                result = future.result()
                results[index] = result
                self._report(version, files[index], result)

        modified: list[Path] = []
        failures: list[ManifestError] = []
        for index in range(len(files)):
            match results[index]:
                case Ok(path):
                    modified.append(path)
                case Err(e):
                    failures.append(e)

        return UpdateReport(modified=tuple(modified), failures=tuple(failures))

    def _write_one(self, version: str, project: ProjectFile) -> Result[Path, ManifestError]:
        try:
            return self._write(version, project)
        except Exception as e:  # noqa: BLE001 - reported per file
            return Err(ManifestError(project.path, str(e) or type(e).__name__))

    def _report(
        self, version: str, project: ProjectFile, result: Result[Path, ManifestError]
    ) -> None:
        match result:
            case Ok(_):
                self._console.step(f"upgrade to {version} for {self._relative(project.path)}")
            case Err(e):
                self._console.error(f"{self._relative(e.path)}: {e.message}")

    def _relative(self, path: Path) -> str:
        try:
            return path.relative_to(self._root).as_posix()
        except ValueError:
            return str(path)
