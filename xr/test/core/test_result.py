"""Tests for xr.core.result module."""

from pathlib import Path

import pytest

from xr.core.result import Err, Ok, Result


def test_ok_unwrap() -> None:
    assert Ok(Path("package.json")).unwrap() == Path("package.json")


def test_err_unwrap_raises_with_payload() -> None:
    with pytest.raises(ValueError, match="unwrap on Err: disk full"):
        Err("disk full").unwrap()


def test_frozen() -> None:
    result = Ok("1.0.0")
    with pytest.raises(AttributeError):
        result.value = "2.0.0"  # type: ignore[misc]


def test_equality_and_repr() -> None:
    assert Ok("1.0.0") == Ok("1.0.0")
    assert Ok("1.0.0") != Err("1.0.0")
    assert repr(Err("boom")) == "Err('boom')"


def test_pattern_matching() -> None:
    result: Result[int, str] = Err("no")
    match result:
        case Ok(value):
            pytest.fail(f"unexpected Ok({value})")
        case Err(error):
            assert error == "no"
