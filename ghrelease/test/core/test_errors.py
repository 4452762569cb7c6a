"""Tests for ghrelease.core.errors module."""

from ghrelease.core.errors import ErrorCode


class TestErrorCode:
    def test_values_are_stable(self) -> None:
        assert ErrorCode.OK == 0
        assert ErrorCode.USER_ERROR == 1
        assert ErrorCode.IO_ERROR == 5

    def test_can_use_as_int(self) -> None:
        """ErrorCode can be used directly where an exit code is expected."""
        code: int = ErrorCode.IO_ERROR
        assert code == 5
        assert int(ErrorCode.USER_ERROR) == 1
