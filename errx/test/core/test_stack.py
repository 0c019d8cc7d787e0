"""Tests for errx.core.stack module."""

from __future__ import annotations

import inspect
import os

import pytest

import errx
from errx.core.chain import ErrorFactory, ErrorNode
from errx.core.stack import (
    MAX_STACK_DEPTH,
    MIN_CALLER_SKIP,
    StackCapturer,
    StackFrame,
    StackTrace,
    frame_from,
    trim_path,
)


def _lineno() -> int:
    """Line number of the caller's current statement."""
    frame = inspect.currentframe()
    assert frame is not None and frame.f_back is not None
    return frame.f_back.f_lineno


def _this_file() -> str:
    return os.path.abspath(__file__)


_one_level = ErrorFactory(StackCapturer().adjusted(1))
_two_levels = ErrorFactory(StackCapturer().adjusted(2))


def _plain_helper() -> tuple[ErrorNode, int]:
    return errx.new("plain"), _lineno()


def _adjusted_helper() -> ErrorNode:
    return _one_level.new("adjusted")


def _outer_helper() -> ErrorNode:
    return _inner_helper()


def _inner_helper() -> ErrorNode:
    return _two_levels.new("two levels")


def _closure_error() -> tuple[ErrorNode, int]:
    def build() -> tuple[ErrorNode, int]:
        return errx.new("closure"), _lineno()

    return build()


class TestStackFrame:
    """Test StackFrame formatting."""

    def test_str_is_listing_line(self) -> None:
        frame = StackFrame("pkg.mod.run", "/src/pkg/mod.py", "pkg/mod.py", 12)
        assert str(frame) == "  at pkg.mod.run(pkg/mod.py:12)\n"

    def test_format_indents_by_depth(self) -> None:
        frame = StackFrame("pkg.mod.run", "/src/pkg/mod.py", "pkg/mod.py", 12)
        assert frame.format(2) == "      at pkg.mod.run(pkg/mod.py:12)\n"

    def test_frozen(self) -> None:
        frame = StackFrame("f", "/a.py", "a.py", 1)
        with pytest.raises(AttributeError):
            frame.line = 2  # type: ignore[misc]

    def test_as_dict(self) -> None:
        frame = StackFrame("pkg.mod.run", "/src/pkg/mod.py", "pkg/mod.py", 12)
        assert frame.as_dict() == {
            "function_name": "pkg.mod.run",
            "file_name": "/src/pkg/mod.py",
            "trimmed_file_name": "pkg/mod.py",
            "line": 12,
        }


class TestStackTrace:
    """Test StackTrace as an immutable sequence."""

    def test_str_joins_frames(self) -> None:
        trace = StackTrace(
            [
                StackFrame("m.a", "/x/m.py", "m.py", 1),
                StackFrame("m.b", "/x/m.py", "m.py", 2),
            ]
        )
        assert str(trace) == "  at m.a(m.py:1)\n  at m.b(m.py:2)\n"

    def test_empty_trace_renders_nothing(self) -> None:
        assert str(StackTrace()) == ""
        assert StackTrace() is not None

    def test_is_tuple(self) -> None:
        trace = StackTrace([StackFrame("m.a", "/x/m.py", "m.py", 1)])
        assert isinstance(trace, tuple)
        assert len(trace) == 1
        assert trace[0].function_name == "m.a"


class TestTrimPath:
    """Test module-relative path trimming."""

    @pytest.mark.parametrize(
        ("module", "file_name", "expected"),
        [
            ("pkg.sub.mod", "/home/user/src/pkg/sub/mod.py", "pkg/sub/mod.py"),
            ("mod", "/home/user/src/mod.py", "mod.py"),
            ("pkg.sub", "/home/user/src/pkg/sub/__init__.py", "pkg/sub/__init__.py"),
            ("pkg.sub.mod", "/pkg/sub/mod.py", "pkg/sub/mod.py"),
        ],
    )
    def test_keeps_module_segments(self, module: str, file_name: str, expected: str) -> None:
        assert trim_path(module, file_name) == expected

    @pytest.mark.parametrize(
        ("module", "file_name"),
        [
            ("pkg.sub.mod", "sub/mod.py"),
            ("pkg.sub.mod", "pkg/sub/mod.py"),
            ("mod", "mod.py"),
        ],
    )
    def test_too_few_separators_is_noop(self, module: str, file_name: str) -> None:
        assert trim_path(module, file_name) == file_name


class TestFrameFrom:
    """Test building frames from live interpreter frames."""

    def test_resolves_current_frame(self) -> None:
        live = inspect.currentframe()
        assert live is not None
        frame, line = frame_from(live), _lineno()

        assert frame is not None
        assert frame.function_name == f"{__name__}.TestFrameFrom.test_resolves_current_frame"
        assert frame.file_name == _this_file()
        assert frame.trimmed_file_name == trim_path(__name__, _this_file())
        assert frame.trimmed_file_name.endswith("test_stack.py")
        assert frame.line == line


class TestStackCapturer:
    """Test StackCapturer configuration."""

    def test_defaults(self) -> None:
        capturer = StackCapturer()
        assert capturer.skip == MIN_CALLER_SKIP
        assert capturer.max_depth == MAX_STACK_DEPTH == 32

    def test_skip_clamped_to_minimum(self) -> None:
        assert StackCapturer(skip=0).skip == MIN_CALLER_SKIP

    def test_adjusted_adds_delta(self) -> None:
        assert StackCapturer().adjusted(2).skip == MIN_CALLER_SKIP + 2
        assert StackCapturer().adjusted(1).adjusted(1).skip == MIN_CALLER_SKIP + 2

    def test_adjusted_clamps_negative(self) -> None:
        assert StackCapturer().adjusted(1).adjusted(-5).skip == MIN_CALLER_SKIP

    def test_adjusted_returns_new_value(self) -> None:
        capturer = StackCapturer()
        capturer.adjusted(3)
        assert capturer.skip == MIN_CALLER_SKIP

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            StackCapturer().skip = 10  # type: ignore[misc]

    def test_max_depth_bounds_frames(self) -> None:
        err = ErrorFactory(StackCapturer(max_depth=2)).new("shallow")
        assert err.stack_trace is not None
        assert len(err.stack_trace) == 2

    def test_zero_depth_is_empty_not_absent(self) -> None:
        err = ErrorFactory(StackCapturer(max_depth=0)).new("none")
        assert err.stack_trace is not None
        assert len(err.stack_trace) == 0

    def test_skip_beyond_stack_is_empty(self) -> None:
        err = ErrorFactory(StackCapturer().adjusted(10_000)).new("deep")
        assert err.stack_trace == StackTrace()


class TestTopFrame:
    """The first frame of a trace is the call site of new()/wrap()."""

    def test_new(self) -> None:
        err, line = errx.new("e"), _lineno()
        assert err.stack_trace is not None
        top = err.stack_trace[0]
        assert top.function_name == f"{__name__}.TestTopFrame.test_new"
        assert top.file_name == _this_file()
        assert top.line == line

    def test_wrap_opaque(self) -> None:
        err, line = errx.wrap(ValueError("x"), "ctx"), _lineno()
        assert err.stack_trace is not None
        top = err.stack_trace[0]
        assert top.function_name == f"{__name__}.TestTopFrame.test_wrap_opaque"
        assert top.line == line

    def test_errorf_and_wrapf(self) -> None:
        err, line = errx.errorf("{}", "x"), _lineno()
        assert err.stack_trace is not None
        assert err.stack_trace[0].line == line

        err, line = errx.wrapf(KeyError("k"), "{}", "x"), _lineno()
        assert err.stack_trace is not None
        assert err.stack_trace[0].line == line

    def test_second_frame_is_caller(self) -> None:
        (err, _), line = _plain_helper(), _lineno()
        assert err.stack_trace is not None
        assert err.stack_trace[0].function_name == f"{__name__}._plain_helper"
        caller = f"{__name__}.TestTopFrame.test_second_frame_is_caller"
        assert err.stack_trace[1].function_name == caller
        assert err.stack_trace[1].line == line

    def test_closure(self) -> None:
        err, line = _closure_error()
        assert err.stack_trace is not None
        assert err.stack_trace[0].function_name == f"{__name__}._closure_error.<locals>.build"
        assert err.stack_trace[0].line == line

    def test_factory_methods(self) -> None:
        errors = ErrorFactory()
        err, line = errors.new("e"), _lineno()
        assert err.stack_trace is not None
        assert err.stack_trace[0].line == line

        err, line = errors.wrap(OSError("io"), "ctx"), _lineno()
        assert err.stack_trace is not None
        assert err.stack_trace[0].line == line


class TestSkipAdjustment:
    """Adjusted capturers start the trace above helper functions."""

    def test_one_level(self) -> None:
        err, line = _adjusted_helper(), _lineno()
        assert err.stack_trace is not None
        top = err.stack_trace[0]
        assert top.function_name == f"{__name__}.TestSkipAdjustment.test_one_level"
        assert top.line == line

    def test_two_levels(self) -> None:
        err, line = _outer_helper(), _lineno()
        assert err.stack_trace is not None
        top = err.stack_trace[0]
        assert top.function_name == f"{__name__}.TestSkipAdjustment.test_two_levels"
        assert top.line == line

    def test_shift_matches_delta(self) -> None:
        base = ErrorFactory(StackCapturer()).new("base")
        shifted = ErrorFactory(StackCapturer().adjusted(1)).new("shifted")
        assert base.stack_trace is not None and shifted.stack_trace is not None
        assert shifted.stack_trace[0] == base.stack_trace[1]
