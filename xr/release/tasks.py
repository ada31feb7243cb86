"""Ordered task queue with fail-fast execution.

A release is a FIFO of named tasks. Each task's action returns an explicit
outcome; the queue turns the first Err into the FAILED status and stops
invoking the remaining tasks. Tasks are drained on execution, never replayed.

Usage:
    queue = TaskQueue(console=console)
    queue.start()
    queue.enqueue(Task("upgradeVersion", update))
    queue.enqueue(Task("commit", commit))
    report = queue.run_all()
    if report.status is TaskStatus.FAILED:
        ...
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from xr.core.result import Err, Ok, Result
from xr.output.console import ConsoleProtocol
from xr.release.errors import ReleaseError

__all__ = ["RunReport", "Task", "TaskAction", "TaskQueue", "TaskStatus"]


class TaskStatus(StrEnum):
    PENDING = "pending"
    RUNNING = "running"
    FAILED = "failed"
    FINISHED = "finished"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.FAILED, TaskStatus.FINISHED)


TaskAction = Callable[[], Result[None, ReleaseError]]


@dataclass(frozen=True, slots=True)
class Task:
    name: str
    action: TaskAction


@dataclass(frozen=True, slots=True)
class RunReport:
    """Outcome of draining the queue.

    Attributes:
        status: FINISHED or FAILED
        executed: Names of tasks that were invoked, in order
        skipped: Names of tasks never invoked because an earlier one failed
        failed_task: Name of the task that failed, if any
        error: The failing task's error, if any
    """

    status: TaskStatus
    executed: tuple[str, ...] = ()
    skipped: tuple[str, ...] = ()
    failed_task: str | None = None
    error: ReleaseError | None = None

    @property
    def ok(self) -> bool:
        return self.status is TaskStatus.FINISHED


class TaskQueue:
    def __init__(self, *, console: ConsoleProtocol) -> None:
        self._console = console
        self._tasks: list[Task] = []
        self._status = TaskStatus.PENDING

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def names(self) -> list[str]:
        return [t.name for t in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def start(self) -> None:
        if self._status is not TaskStatus.PENDING:
            raise RuntimeError(f"cannot start a {self._status} release")
        self._status = TaskStatus.RUNNING

    def enqueue(self, task: Task) -> bool:
        """Append a task; True iff the queue grew by exactly one."""
        expected = len(self._tasks) + 1
        self._tasks.append(task)
        return len(self._tasks) == expected

    def run_all(self) -> RunReport:
        """Run queued tasks in insertion order, stopping at the first failure."""
        if self._status is TaskStatus.PENDING:
            self.start()
        elif self._status.is_terminal:
            raise RuntimeError(f"release already {self._status}")

        tasks, self._tasks = self._tasks, []
        executed: list[str] = []
        failed_task: str | None = None
        error: ReleaseError | None = None

        for index, task in enumerate(tasks):
            if self._status is TaskStatus.FAILED:
                skipped = tuple(t.name for t in tasks[index:])
                self._console.debug(f"fail-fast: skipping {', '.join(skipped)}")
                return RunReport(
                    status=self._status,
                    executed=tuple(executed),
                    skipped=skipped,
                    failed_task=failed_task,
                    error=error,
                )

            self._console.debug(f"running task {task.name}")
            executed.append(task.name)
            match self._invoke(task):
                case Err(e):
                    self._status = TaskStatus.FAILED
                    failed_task = task.name
                    error = e
                    self._console.error(f"{task.name} failed: {e.pretty()}")
                case Ok(_):
                    pass

        if self._status is not TaskStatus.FAILED:
            self._status = TaskStatus.FINISHED
        return RunReport(
            status=self._status,
            executed=tuple(executed),
            failed_task=failed_task,
            error=error,
        )

    def _invoke(self, task: Task) -> Result[None, ReleaseError]:
        try:
            return task.action()
        except Exception as e:  # noqa: BLE001 - a crashing step is a failed step
            return Err(ReleaseError(kind="step_failed", message=f"{type(e).__name__}: {e}"))
