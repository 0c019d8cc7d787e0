"""Tests for errx.core.errors module."""

from errx.core.errors import ErrorCode


class TestErrorCodeValues:
    """Test that error codes have expected numeric values."""

    def test_ok_is_zero(self) -> None:
        assert ErrorCode.OK == 0

    def test_user_error_is_one(self) -> None:
        assert ErrorCode.USER_ERROR == 1

    def test_config_error_is_two(self) -> None:
        assert ErrorCode.CONFIG_ERROR == 2


class TestErrorCodeUsage:
    """Test that ErrorCode works well as exit codes."""

    def test_can_use_as_int(self) -> None:
        code: int = ErrorCode.CONFIG_ERROR
        assert code == 2
        assert int(ErrorCode.CONFIG_ERROR) == 2

    def test_str(self) -> None:
        assert str(ErrorCode.CONFIG_ERROR) == "config error"

    def test_is_success(self) -> None:
        assert ErrorCode.OK.is_success
        assert not ErrorCode.USER_ERROR.is_success
