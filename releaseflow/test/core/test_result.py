"""Tests for releaseflow.core.result module."""

from __future__ import annotations

import pytest

from releaseflow.core.result import Err, Ok, Result, is_err, is_ok


def _half(n: int) -> Result[int, str]:
    if n % 2:
        return Err(f"{n} is odd")
    return Ok(n // 2)


def test_ok() -> None:
    result = _half(4)
    assert is_ok(result)
    assert not is_err(result)
    assert result.unwrap() == 2
    assert result.map(lambda v: v * 10) == Ok(20)
    assert repr(result) == "Ok(2)"


def test_err() -> None:
    result = _half(3)
    assert is_err(result)
    assert result.unwrap_or(0) == 0
    assert result.map(lambda v: v * 10) == Err("3 is odd")
    with pytest.raises(ValueError, match="3 is odd"):
        result.unwrap()


def test_pattern_matching() -> None:
    match _half(3):
        case Ok(value):
            raise AssertionError(f"unexpected value {value}")
        case Err(error):
            assert error == "3 is odd"
