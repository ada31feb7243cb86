from __future__ import annotations

import pytest

from xr.core.result import Err, Ok, Result
from xr.output.console import MockConsole
from xr.release.errors import ReleaseError
from xr.release.tasks import Task, TaskQueue, TaskStatus


def _ok(calls: list[str], name: str) -> Task:
    def action() -> Result[None, ReleaseError]:
        calls.append(name)
        return Ok(None)

    return Task(name, action)


def _fail(calls: list[str], name: str) -> Task:
    def action() -> Result[None, ReleaseError]:
        calls.append(name)
        return Err(ReleaseError(kind="step_failed", message=f"{name} broke"))

    return Task(name, action)


def test_enqueue_reports_growth() -> None:
    queue = TaskQueue(console=MockConsole())
    assert queue.enqueue(_ok([], "a")) is True
    assert queue.enqueue(_ok([], "b")) is True
    assert queue.names == ["a", "b"]
    assert len(queue) == 2


def test_status_lifecycle() -> None:
    queue = TaskQueue(console=MockConsole())
    assert queue.status is TaskStatus.PENDING
    queue.start()
    assert queue.status is TaskStatus.RUNNING
    report = queue.run_all()
    assert report.status is TaskStatus.FINISHED
    assert queue.status is TaskStatus.FINISHED


def test_runs_in_insertion_order() -> None:
    calls: list[str] = []
    queue = TaskQueue(console=MockConsole())
    for name in ("upgradeVersion", "commit", "tag", "push"):
        queue.enqueue(_ok(calls, name))

    report = queue.run_all()

    assert calls == ["upgradeVersion", "commit", "tag", "push"]
    assert report.ok
    assert report.executed == ("upgradeVersion", "commit", "tag", "push")
    assert report.skipped == ()


def test_fail_fast_skips_remaining_tasks() -> None:
    calls: list[str] = []
    console = MockConsole()
    queue = TaskQueue(console=console)
    queue.enqueue(_ok(calls, "upgradeVersion"))
    queue.enqueue(_fail(calls, "commit"))
    queue.enqueue(_ok(calls, "tag"))
    queue.enqueue(_ok(calls, "push"))

    report = queue.run_all()

    assert calls == ["upgradeVersion", "commit"]
    assert report.status is TaskStatus.FAILED
    assert report.failed_task == "commit"
    assert report.skipped == ("tag", "push")
    assert report.error is not None and report.error.message == "commit broke"
    assert console.find("commit failed: commit broke")


def test_failure_on_last_task() -> None:
    calls: list[str] = []
    queue = TaskQueue(console=MockConsole())
    queue.enqueue(_ok(calls, "a"))
    queue.enqueue(_fail(calls, "b"))

    report = queue.run_all()

    assert report.status is TaskStatus.FAILED
    assert report.skipped == ()


def test_raising_action_is_a_failed_step() -> None:
    def boom() -> Result[None, ReleaseError]:
        raise RuntimeError("disk on fire")

    calls: list[str] = []
    queue = TaskQueue(console=MockConsole())
    queue.enqueue(Task("commit", boom))
    queue.enqueue(_ok(calls, "tag"))

    report = queue.run_all()

    assert report.status is TaskStatus.FAILED
    assert report.error is not None
    assert "RuntimeError: disk on fire" in report.error.message
    assert calls == []


def test_queue_is_drained_not_replayed() -> None:
    calls: list[str] = []
    queue = TaskQueue(console=MockConsole())
    queue.enqueue(_ok(calls, "a"))
    queue.run_all()

    assert len(queue) == 0
    with pytest.raises(RuntimeError, match="already finished"):
        queue.run_all()
    assert calls == ["a"]


def test_cannot_start_twice() -> None:
    queue = TaskQueue(console=MockConsole())
    queue.start()
    with pytest.raises(RuntimeError):
        queue.start()
