from __future__ import annotations

from collections.abc import Iterator

import pytest
import typer

from xr.cli.prompts import TerminalPrompter
from xr.output.console import MockConsole
from xr.release.prompts import CANCELLED, Chosen, Confirmed


def _scripted(*answers: str):
    it: Iterator[str] = iter(answers)
    asked: list[tuple[str, str]] = []

    def ask(prompt: str, default: str) -> str:
        asked.append((prompt, default))
        return next(it)

    return ask, asked


def _abort(*_: object) -> str:
    raise typer.Abort()


def test_confirm_yes_and_no() -> None:
    yes = TerminalPrompter(MockConsole(), interactive=False, ask_yes_no=lambda _: True)
    no = TerminalPrompter(MockConsole(), interactive=False, ask_yes_no=lambda _: False)

    assert yes.confirm("should commit?") == Confirmed(True)
    assert no.confirm("should commit?") == Confirmed(False)


def test_confirm_abort_is_cancel_not_no() -> None:
    prompter = TerminalPrompter(MockConsole(), interactive=False, ask_yes_no=_abort)
    assert prompter.confirm("should push to remote?") is CANCELLED


def test_choose_version_from_numbered_list() -> None:
    ask, asked = _scripted("2")
    console = MockConsole()
    prompter = TerminalPrompter(console, interactive=False, ask=ask)

    assert prompter.choose_version("1.2.3") == Chosen("1.3.0")
    assert asked == [("Select", "1")]
    assert console.find("current version: 1.2.3")
    assert console.find("patch")


def test_choose_version_reasks_out_of_range() -> None:
    ask, asked = _scripted("0", "abc", "1")
    console = MockConsole()
    prompter = TerminalPrompter(console, interactive=False, ask=ask)

    assert prompter.choose_version("1.2.3") == Chosen("1.2.4")
    assert len(asked) == 3
    assert len(console.find("pick a number")) == 2


def test_custom_version_reasks_until_valid() -> None:
    # "custom" is listed after the seven bump kinds.
    ask, asked = _scripted("8", "1.2", "v2", "2.0.0-rc.1")
    console = MockConsole()
    prompter = TerminalPrompter(console, interactive=False, ask=ask)

    assert prompter.choose_version("1.2.3") == Chosen("2.0.0-rc.1")
    assert asked[1:] == [("Version", "1.2.3")] * 3
    assert console.find("not a valid semantic version: '1.2'")


def test_choose_version_without_current() -> None:
    ask, _ = _scripted("1")
    prompter = TerminalPrompter(MockConsole(), interactive=False, ask=ask)
    assert prompter.choose_version("") == Chosen("0.0.1")


@pytest.mark.parametrize("answers", [(), ("8",)])
def test_choose_version_abort_is_cancel(answers: tuple[str, ...]) -> None:
    ask, _ = _scripted(*answers)

    def ask_or_abort(prompt: str, default: str) -> str:
        try:
            return ask(prompt, default)
        except StopIteration:
            raise typer.Abort() from None

    prompter = TerminalPrompter(MockConsole(), interactive=False, ask=ask_or_abort)
    assert prompter.choose_version("1.0.0") is CANCELLED


def test_interactive_selector_cancel(monkeypatch: pytest.MonkeyPatch) -> None:
    import xr.cli.prompts as prompts_mod
    from xr.cli.selector import SelectorResult

    monkeypatch.setattr(
        prompts_mod,
        "select_one",
        lambda **_: SelectorResult(action="cancel", value=None, index=0),
    )
    prompter = TerminalPrompter(MockConsole(), interactive=True)
    assert prompter.choose_version("1.0.0") is CANCELLED


def test_interactive_selector_pick(monkeypatch: pytest.MonkeyPatch) -> None:
    import xr.cli.prompts as prompts_mod
    from xr.cli.selector import SelectorResult

    seen: dict[str, object] = {}

    def fake_select(**kwargs: object) -> SelectorResult[str]:
        seen.update(kwargs)
        return SelectorResult(action="select", value="2.0.0", index=2)

    monkeypatch.setattr(prompts_mod, "select_one", fake_select)
    prompter = TerminalPrompter(MockConsole(), interactive=True)

    assert prompter.choose_version("1.4.0") == Chosen("2.0.0")
    assert seen["subtitle"] == "current version: 1.4.0"
