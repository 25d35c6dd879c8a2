"""Tests for release_notifier.core.result module."""

import pytest

from release_notifier.core.result import Err, Ok, Result


class TestResult:
    """Tests for Ok / Err."""

    def test_equality(self) -> None:
        assert Ok(1) == Ok(1)
        assert Ok(1) != Err(1)
        assert Err("a") == Err("a")

    def test_repr(self) -> None:
        assert repr(Ok([1])) == "Ok([1])"
        assert repr(Err("boom")) == "Err('boom')"

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Ok(1).value = 2  # type: ignore[misc]

    def test_pattern_matching(self) -> None:
        result: Result[int, str] = Err("nope")
        match result:
            case Ok(value):
                pytest.fail(f"unexpected Ok({value})")
            case Err(error):
                assert error == "nope"
