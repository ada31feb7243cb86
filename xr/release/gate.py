"""Confirmation gate for the optional release steps.

The steps and their order are declared once in RELEASE_STEPS. Tagging and
pushing only make sense after the commit (and tag) exist, so the order is
commit, tag, push and the gate always evaluates them in that order.

For each step the gate resolves a yes/no:
- `--yes` forces yes without asking
- an answer already set by flag or config is used as is
- otherwise the operator is asked; a cancel aborts the whole gate

A yes queues the step's action, a no leaves it out entirely.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Protocol

from xr.core.result import Err, Ok, Result
from xr.git import GitError
from xr.output.console import ConsoleProtocol
from xr.release.errors import ReleaseError, canceled
from xr.release.options import ReleaseOptions, StepName
from xr.release.prompts import Cancelled, Confirmed, Prompter
from xr.release.tasks import Task, TaskAction, TaskQueue


class GitClient(Protocol):
    def commit(
        self,
        *,
        message: str,
        files: Sequence[Path],
        stage_all: bool = False,
        verify: bool = True,
        dry: bool = False,
    ) -> Result[str, GitError]: ...

    def tag(self, *, tag_name: str, message: str, dry: bool = False) -> Result[str, GitError]: ...

    def push(self, *, follow_tags: bool = True, dry: bool = False) -> Result[str, GitError]: ...


@dataclass(frozen=True, slots=True)
class StepContext:
    """What a step action needs once it runs.

    `modified_files` is the live list filled by the version update, which
    always runs before any gated step.
    """

    options: ReleaseOptions
    git: GitClient
    message: str
    tag_name: str
    modified_files: list[Path]


ActionBuilder = Callable[[StepContext], TaskAction]


@dataclass(frozen=True, slots=True)
class StepDefinition:
    name: StepName
    prompt: str
    build: ActionBuilder


def _git_outcome(result: Result[str, GitError]) -> Result[None, ReleaseError]:
    match result:
        case Ok(_):
            return Ok(None)
        case Err(e):
            return Err(
                ReleaseError(
                    kind="step_failed",
                    message=f"git {e.command}: {e.message}",
                    hint=f"exit {e.returncode}",
                )
            )


def _commit_action(ctx: StepContext) -> TaskAction:
    opts = ctx.options.commit_options

    def action() -> Result[None, ReleaseError]:
        return _git_outcome(
            ctx.git.commit(
                message=ctx.message,
                files=list(ctx.modified_files),
                stage_all=opts.stage_all,
                verify=opts.verify,
                dry=ctx.options.dry,
            )
        )

    return action


def _tag_action(ctx: StepContext) -> TaskAction:
    def action() -> Result[None, ReleaseError]:
        return _git_outcome(
            ctx.git.tag(tag_name=ctx.tag_name, message=ctx.message, dry=ctx.options.dry)
        )

    return action


def _push_action(ctx: StepContext) -> TaskAction:
    def action() -> Result[None, ReleaseError]:
        return _git_outcome(
            ctx.git.push(
                follow_tags=ctx.options.push_options.follow_tags,
                dry=ctx.options.dry,
            )
        )

    return action


RELEASE_STEPS: tuple[StepDefinition, ...] = (
    StepDefinition("commit", "should commit?", _commit_action),
    StepDefinition("tag", "should create tag?", _tag_action),
    StepDefinition("push", "should push to remote?", _push_action),
)


class ConfirmationGate:
    def __init__(self, *, prompter: Prompter, console: ConsoleProtocol) -> None:
        self._prompter = prompter
        self._console = console

    def decide(self, options: ReleaseOptions, step: StepDefinition) -> Result[bool, ReleaseError]:
        if options.yes:
            return Ok(True)

        preset = options.step_flag(step.name)
        if preset is not None:
            return Ok(preset)

        match self._prompter.confirm(step.prompt):
            case Cancelled():
                return Err(canceled())
            case Confirmed(value=value):
                return Ok(value)

    def gate_all(
        self,
        options: ReleaseOptions,
        context: StepContext,
        queue: TaskQueue,
        steps: Sequence[StepDefinition] = RELEASE_STEPS,
    ) -> Result[ReleaseOptions, ReleaseError]:
        """Resolve every step in order and queue the confirmed ones.

        Returns the options with each step's answer recorded. Stops at the
        first cancel; steps after it are never evaluated.
        """
        resolved = options
        for step in steps:
            decision = self.decide(resolved, step)
            if isinstance(decision, Err):
                return decision

            resolved = replace(resolved, **{step.name: decision.value})
            if not decision.value:
                self._console.debug(f"step {step.name} skipped")
                continue

            task = Task(step.name, step.build(context))
            if not queue.enqueue(task):
                raise AssertionError(f"queue did not grow when adding {step.name}")

        return Ok(resolved)
