"""Release run lifecycle.

start -> resolve version -> discover files and queue the version update ->
gate and queue commit/tag/push -> execute the queue -> finish.

The run never exits the process itself. Setup failures and cancellation come
back as Err(ReleaseError); the CLI driver turns them into exit codes.

Usage:
    run = ReleaseRun(options, console=console, prompter=prompter)
    match run.run():
        case Ok(summary):
            ...
        case Err(e) if e.is_cancel:
            ...
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from xr.core.result import Err, Ok, Result
from xr.git import DRY_ENV, Repository
from xr.output.console import ConsoleProtocol, Style
from xr.projects import ProjectFile, find_project_files, read_version, write_version
from xr.release.errors import ReleaseError
from xr.release.gate import ConfirmationGate, GitClient, StepContext
from xr.release.message import format_message
from xr.release.options import ReleaseOptions
from xr.release.prompts import Prompter
from xr.release.resolver import DiscoverProjects, ReadVersion, VersionResolver
from xr.release.tasks import RunReport, Task, TaskAction, TaskQueue, TaskStatus
from xr.release.updater import ProjectVersionUpdater, WriteVersion

UPDATE_TASK = "upgradeVersion"


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    """Everything the driver needs to report a finished (or failed) run."""

    options: ReleaseOptions
    current_version: str
    next_version: str
    tag_name: str
    modified_files: tuple[Path, ...]
    report: RunReport

    @property
    def status(self) -> TaskStatus:
        return self.report.status


@contextmanager
def dry_run_env(dry: bool) -> Iterator[None]:
    """Expose the dry-run flag as DRY=true for the duration of the block."""
    if not dry:
        yield
        return

    previous = os.environ.get(DRY_ENV)
    os.environ[DRY_ENV] = "true"
    try:
        yield
    finally:
        if previous is None:
            os.environ.pop(DRY_ENV, None)
        else:
            os.environ[DRY_ENV] = previous


class ReleaseRun:
    def __init__(
        self,
        options: ReleaseOptions,
        *,
        console: ConsoleProtocol,
        prompter: Prompter,
        git: GitClient | None = None,
        discover: DiscoverProjects = find_project_files,
        read: ReadVersion = read_version,
        write: WriteVersion = write_version,
    ) -> None:
        self._options = options
        self._console = console
        self._git: GitClient = git or Repository(options.dir, console=console)
        self._discover = discover
        self._resolver = VersionResolver(
            prompter=prompter, console=console, discover=discover, read=read
        )
        self._updater = ProjectVersionUpdater(root=options.dir, console=console, write=write)
        self._gate = ConfirmationGate(prompter=prompter, console=console)
        self._queue = TaskQueue(console=console)
        self._modified_files: list[Path] = []

    @property
    def status(self) -> TaskStatus:
        return self._queue.status

    @property
    def modified_files(self) -> list[Path]:
        return list(self._modified_files)

    def run(self) -> Result[ReleaseSummary, ReleaseError]:
        self._start()
        with dry_run_env(self._options.dry):
            resolved = self._resolver.resolve(self._options)
            if isinstance(resolved, Err):
                return resolved
            current = resolved.value.current
            next_version = resolved.value.next
            self._console.debug(
                f"release {current or '<none>'} -> {next_version}"
                f" (read from {resolved.value.main_file.name})"
            )

            files = self._discover(
                self._options.dir, self._options.excludes, self._options.recursive
            )
            self._console.debug(f"found {len(files)} project files")
            update = Task(UPDATE_TASK, self._update_action(next_version, files))
            if not self._queue.enqueue(update):
                raise AssertionError(f"queue did not grow when adding {UPDATE_TASK}")

            message = format_message(self._options.commit_options.template, next_version)
            tag_name = f"v{next_version}"
            context = StepContext(
                options=self._options,
                git=self._git,
                message=message,
                tag_name=tag_name,
                modified_files=self._modified_files,
            )
            gated = self._gate.gate_all(self._options, context, self._queue)
            if isinstance(gated, Err):
                return gated
            self._console.debug(f"queue: {', '.join(self._queue.names)}")

            report = self._queue.run_all()
            self._done(report)

            return Ok(
                ReleaseSummary(
                    options=gated.value,
                    current_version=current,
                    next_version=next_version,
                    tag_name=tag_name,
                    modified_files=tuple(self._modified_files),
                    report=report,
                )
            )

    def _start(self) -> None:
        self._console.header("Cross release")
        if self._options.dry:
            self._console.print(" DRY RUN ", Style.INFO)
        self._queue.start()

    def _update_action(self, version: str, files: list[ProjectFile]) -> TaskAction:
        def action() -> Result[None, ReleaseError]:
            report = self._updater.apply(version, files)
            self._modified_files.extend(report.modified)
            if report.ok:
                return Ok(None)
            return Err(
                ReleaseError(
                    kind="update_failed",
                    message=f"{len(report.failures)} of {len(files)} project files not updated",
                    hint=", ".join(str(f.path) for f in report.failures),
                )
            )

        return action

    def _done(self, report: RunReport) -> None:
        if report.skipped:
            self._console.warning(f"not run: {', '.join(report.skipped)}")
        if report.ok:
            self._console.success("Done")
        else:
            self._console.print(f"Release failed at {report.failed_task}", Style.ERROR)
