from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from xr.core.result import Err, Ok, Result
from xr.git import GitError
from xr.output.console import MockConsole
from xr.release.gate import RELEASE_STEPS, ConfirmationGate, StepContext
from xr.release.options import CommitOptions, PushOptions, ReleaseOptions
from xr.release.prompts import CANCELLED, Chosen, ConfirmAnswer, Confirmed, VersionAnswer
from xr.release.tasks import TaskQueue


@dataclass
class _Prompter:
    answers: dict[str, ConfirmAnswer] = field(default_factory=dict)
    asked: list[str] = field(default_factory=list)

    def choose_version(self, current: str) -> VersionAnswer:
        return Chosen("1.0.0")

    def confirm(self, message: str) -> ConfirmAnswer:
        self.asked.append(message)
        return self.answers.get(message, Confirmed(True))


@dataclass
class _Git:
    calls: list[tuple[str, dict[str, object]]] = field(default_factory=list)
    fail: str | None = None

    def _record(self, name: str, **kwargs: object) -> Result[str, GitError]:
        self.calls.append((name, kwargs))
        if name == self.fail:
            return Err(GitError(command=name, message="rejected", returncode=1))
        return Ok("")

    def commit(
        self,
        *,
        message: str,
        files: Sequence[Path],
        stage_all: bool = False,
        verify: bool = True,
        dry: bool = False,
    ) -> Result[str, GitError]:
        return self._record(
            "commit",
            message=message,
            files=list(files),
            stage_all=stage_all,
            verify=verify,
            dry=dry,
        )

    def tag(self, *, tag_name: str, message: str, dry: bool = False) -> Result[str, GitError]:
        return self._record("tag", tag_name=tag_name, message=message, dry=dry)

    def push(self, *, follow_tags: bool = True, dry: bool = False) -> Result[str, GitError]:
        return self._record("push", follow_tags=follow_tags, dry=dry)


def _context(options: ReleaseOptions, git: _Git, modified: list[Path] | None = None) -> StepContext:
    return StepContext(
        options=options,
        git=git,
        message="chore: release v1.0.0",
        tag_name="v1.0.0",
        modified_files=modified if modified is not None else [],
    )


def _gate(prompter: _Prompter) -> ConfirmationGate:
    return ConfirmationGate(prompter=prompter, console=MockConsole())


def test_step_order_is_commit_tag_push() -> None:
    assert [s.name for s in RELEASE_STEPS] == ["commit", "tag", "push"]


def test_yes_forces_every_step_without_prompting(tmp_path: Path) -> None:
    prompter = _Prompter()
    options = ReleaseOptions(dir=tmp_path, yes=True, commit=False)
    queue = TaskQueue(console=MockConsole())

    result = _gate(prompter).gate_all(options, _context(options, _Git()), queue)

    assert isinstance(result, Ok)
    assert queue.names == ["commit", "tag", "push"]
    assert (result.value.commit, result.value.tag, result.value.push) == (True, True, True)
    assert prompter.asked == []


def test_preset_flags_are_not_asked(tmp_path: Path) -> None:
    prompter = _Prompter()
    options = ReleaseOptions(dir=tmp_path, commit=True, tag=False)
    queue = TaskQueue(console=MockConsole())

    result = _gate(prompter).gate_all(options, _context(options, _Git()), queue)

    assert isinstance(result, Ok)
    assert queue.names == ["commit", "push"]
    assert prompter.asked == ["should push to remote?"]
    assert result.value.push is True


def test_no_answer_omits_step(tmp_path: Path) -> None:
    prompter = _Prompter(answers={"should create tag?": Confirmed(False)})
    options = ReleaseOptions(dir=tmp_path)
    queue = TaskQueue(console=MockConsole())

    result = _gate(prompter).gate_all(options, _context(options, _Git()), queue)

    assert isinstance(result, Ok)
    assert queue.names == ["commit", "push"]
    assert result.value.tag is False
    assert prompter.asked == ["should commit?", "should create tag?", "should push to remote?"]


def test_cancel_stops_later_gates(tmp_path: Path) -> None:
    prompter = _Prompter(answers={"should commit?": CANCELLED})
    options = ReleaseOptions(dir=tmp_path)
    queue = TaskQueue(console=MockConsole())

    result = _gate(prompter).gate_all(options, _context(options, _Git()), queue)

    assert isinstance(result, Err)
    assert result.error.is_cancel
    assert prompter.asked == ["should commit?"]
    assert queue.names == []


def test_actions_call_git_with_options(tmp_path: Path) -> None:
    git = _Git()
    modified: list[Path] = []
    options = ReleaseOptions(
        dir=tmp_path,
        yes=True,
        dry=True,
        commit_options=CommitOptions(stage_all=True, verify=False),
        push_options=PushOptions(follow_tags=False),
    )
    queue = TaskQueue(console=MockConsole())
    _gate(_Prompter()).gate_all(options, _context(options, git, modified), queue)

    # Files modified after gating are still what the commit stages.
    modified.append(tmp_path / "package.json")
    report = queue.run_all()

    assert report.ok
    assert git.calls == [
        (
            "commit",
            {
                "message": "chore: release v1.0.0",
                "files": [tmp_path / "package.json"],
                "stage_all": True,
                "verify": False,
                "dry": True,
            },
        ),
        ("tag", {"tag_name": "v1.0.0", "message": "chore: release v1.0.0", "dry": True}),
        ("push", {"follow_tags": False, "dry": True}),
    ]


@pytest.mark.parametrize("failing", ["commit", "tag"])
def test_git_failure_fails_the_step(tmp_path: Path, failing: str) -> None:
    git = _Git(fail=failing)
    options = ReleaseOptions(dir=tmp_path, yes=True)
    queue = TaskQueue(console=MockConsole())
    _gate(_Prompter()).gate_all(options, _context(options, git), queue)

    report = queue.run_all()

    assert report.failed_task == failing
    assert report.error is not None
    assert report.error.message == f"git {failing}: rejected"
    assert "push" not in [name for name, _ in git.calls]
