from __future__ import annotations

import pytest

from releaseflow.core.result import Err, Ok
from releaseflow.release.errors import (
    InvalidVersionError,
    MissingVersionError,
    VersionOrderError,
)
from releaseflow.release.version import (
    DEV_MARKER,
    Version,
    compute_next_version,
    parse_version,
)


def _v(text: str) -> Version:
    parsed = parse_version(text)
    assert isinstance(parsed, Ok)
    return parsed.value


# =============================================================================
# Parsing and formatting
# =============================================================================


def test_parse_release_and_prerelease() -> None:
    assert _v("1.2.3") == Version(1, 2, 3)
    assert _v("1.2.4-DEV") == Version(1, 2, 4, ("DEV",))
    assert _v("v0.1.0") == Version(0, 1, 0)
    assert _v("1.0.0-rc.2") == Version(1, 0, 0, ("rc", 2))


def test_parse_fills_missing_components() -> None:
    assert _v("2") == Version(2, 0, 0)
    assert _v("1.2") == Version(1, 2, 0)


def test_parse_rejects_garbage() -> None:
    for text in ("", "x.y.z", "1.2.3.4", "01.2.3", "1.2.3-"):
        result = parse_version(text)
        assert isinstance(result, Err), text
        assert result.error == InvalidVersionError(text)


def test_str_and_tag() -> None:
    assert str(Version(1, 2, 4, ("DEV",))) == "1.2.4-DEV"
    assert Version(1, 2, 3).to_tag() == "v1.2.3"
    assert Version(1, 0, 0, ("rc", 2)).to_tag() == "v1.0.0-rc.2"


# =============================================================================
# Ordering
# =============================================================================


def test_numeric_components_compare_numerically() -> None:
    assert Version(1, 2, 10) > Version(1, 2, 9)
    assert Version(1, 10, 0) > Version(1, 9, 99)
    assert Version(2, 0, 0) > Version(1, 99, 99)


def test_release_sorts_above_its_prereleases() -> None:
    assert Version(1, 2, 4) > Version(1, 2, 4, ("DEV",))
    assert Version(1, 2, 4, ("DEV",)) > Version(1, 2, 3)


def test_prerelease_components_compare_in_order() -> None:
    assert Version(1, 0, 0, ("alpha",)) < Version(1, 0, 0, ("beta",))
    assert Version(1, 0, 0, ("rc", 2)) < Version(1, 0, 0, ("rc", 10))
    assert Version(1, 0, 0, (1,)) < Version(1, 0, 0, ("alpha",))
    assert Version(1, 0, 0, ("rc",)) < Version(1, 0, 0, ("rc", 1))


def test_equality_and_sorting() -> None:
    versions = [_v("1.2.4"), _v("1.2.4-DEV"), _v("1.2.3"), _v("0.9.0")]
    assert sorted(versions) == [_v("0.9.0"), _v("1.2.3"), _v("1.2.4-DEV"), _v("1.2.4")]
    assert _v("1.2.4-DEV") <= _v("1.2.4-DEV")


# =============================================================================
# compute_next_version
# =============================================================================


@pytest.mark.parametrize("text", ["0.0.0", "1.2.3", "10.20.30"])
def test_prerelease_mode_from_release_starts_dev(text: str) -> None:
    prev = _v(text)
    result = compute_next_version(prev, None, "prerelease")
    assert isinstance(result, Ok)
    assert result.value == Version(prev.major, prev.minor, prev.patch + 1, (DEV_MARKER,))
    assert result.value > prev


@pytest.mark.parametrize("text", ["1.2.4-DEV", "0.1.0-rc.1", "3.0.0-alpha"])
def test_prerelease_mode_from_prerelease_finalizes(text: str) -> None:
    prev = _v(text)
    result = compute_next_version(prev, None, "prerelease")
    assert isinstance(result, Ok)
    assert result.value == Version(prev.major, prev.minor, prev.patch)
    assert result.value > prev


@pytest.mark.parametrize("text", ["1.2.4-DEV", "0.1.0-rc.1"])
def test_release_mode_from_prerelease_finalizes(text: str) -> None:
    prev = _v(text)
    result = compute_next_version(prev, None, "release")
    assert isinstance(result, Ok)
    assert result.value == prev.finalized()


@pytest.mark.parametrize("text", ["1.2.3", "0.0.9"])
def test_release_mode_from_release_bumps_patch(text: str) -> None:
    prev = _v(text)
    result = compute_next_version(prev, None, "release")
    assert isinstance(result, Ok)
    assert result.value == Version(prev.major, prev.minor, prev.patch + 1)


def test_scenarios() -> None:
    assert compute_next_version(_v("1.2.3"), None, "prerelease") == Ok(_v("1.2.4-DEV"))
    assert compute_next_version(_v("1.2.4-DEV"), None, "prerelease") == Ok(_v("1.2.4"))
    assert compute_next_version(_v("1.2.4-DEV"), None, "release") == Ok(_v("1.2.4"))


def test_explicit_version_must_increase() -> None:
    result = compute_next_version(_v("2.0.0"), _v("1.9.9"), "prerelease")
    assert isinstance(result, Err)
    assert result.error == VersionOrderError(previous=_v("2.0.0"), specified=_v("1.9.9"))
    assert "2.0.0" in result.error.message
    assert "1.9.9" in result.error.message


def test_explicit_version_equal_to_previous_is_rejected() -> None:
    result = compute_next_version(_v("1.2.3"), _v("1.2.3"), "release")
    assert isinstance(result, Err)
    assert isinstance(result.error, VersionOrderError)


def test_explicit_version_wins_over_policy() -> None:
    assert compute_next_version(_v("1.2.3"), _v("2.0.0"), "prerelease") == Ok(_v("2.0.0"))


def test_explicit_version_without_previous() -> None:
    assert compute_next_version(None, _v("0.1.0"), "prerelease") == Ok(_v("0.1.0"))


def test_missing_previous_and_explicit() -> None:
    result = compute_next_version(None, None, "prerelease")
    assert isinstance(result, Err)
    assert isinstance(result.error, MissingVersionError)
