"""Tests for relprune.core.errors module."""

from relprune.core.errors import ContextError, ErrorCode, InvalidCutoffError


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert int(ErrorCode.OK) == 0
        assert int(ErrorCode.USER_ERROR) == 1
        assert int(ErrorCode.ENV_ERROR) == 2
        assert int(ErrorCode.INTERNAL_ERROR) == 3

    def test_str(self) -> None:
        assert str(ErrorCode.USER_ERROR) == "user error"

    def test_success_flags(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.OK.is_error
        assert ErrorCode.ENV_ERROR.is_error


def test_invalid_cutoff_is_value_error() -> None:
    assert issubclass(InvalidCutoffError, ValueError)
    assert str(InvalidCutoffError("Invalid time value")) == "Invalid time value"


def test_context_error_message() -> None:
    assert str(ContextError("no repo")) == "no repo"
