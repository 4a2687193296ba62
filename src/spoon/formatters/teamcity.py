"""TeamCity service messages."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from spoon.results import (
        ErrorResult,
        RunnerResult,
        RunResult,
        SpecResult,
        SuiteResult,
        TraceFrame,
    )

_ESCAPES = str.maketrans(
    {"|": "||", "'": "|'", "\n": "|n", "\r": "|r", "[": "|[", "]": "|]"}
)


def escape(value: str) -> str:
    return value.translate(_ESCAPES)


class TeamcityFormatter(BaseFormatter):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._open_suite: str | None = None

    def render_run_start(self, result: RunnerResult) -> None:
        self._message("enteredTheMatrix")
        self._message("testCount", count=str(result.total))

    def render_suite_start(self, suite: SuiteResult) -> None:
        self._end_suite()
        self._message("testSuiteStarted", name=suite.label)
        self._open_suite = suite.label

    def render_spec(self, result: SpecResult) -> None:
        self._message("testStarted", name=result.label, captureStandardOutput="true")
        if self.console_output:
            self._message("testStdOut", name=result.label, out=self.console_output)
        super().render_spec(result)
        finished: dict[str, str] = {"name": result.label}
        if result.elapsed is not None:
            finished["duration"] = str(int(result.elapsed * 1000))
        self._message("testFinished", **finished)

    def render_pending_spec(self, result: SpecResult) -> None:
        self._message("testIgnored", name=result.label, message="pending")

    def render_failing_spec(self, result: SpecResult) -> None:
        self._message(
            "testFailed",
            name=result.label,
            message=result.message or "",
            details=result.trace or "",
        )

    def render_error(self, error: ErrorResult) -> None:
        details = "\n".join(self._frame_location(frame) for frame in error.trace)
        self._message("message", text=error.message, errorDetails=details, status="ERROR")

    def render_exception(self, info: ErrorResult) -> None:
        self._message("buildProblem", description=info.message)

    def render_result(self, result: RunResult) -> None:
        self._end_suite()

    def render_coverage(self, message: str) -> None:
        self._message("message", text=message)

    def render_threshold_failure(self, messages: list[str]) -> None:
        for message in messages:
            self._message("message", text=message, status="ERROR")

    def render_complete(self, failure_count: int) -> None:
        self._end_suite()

    def _frame_location(self, frame: TraceFrame) -> str:
        location = self.filename(frame.file)
        if frame.line is not None:
            location += f":{frame.line}"
        return location

    def _end_suite(self) -> None:
        if self._open_suite is not None:
            self._message("testSuiteFinished", name=self._open_suite)
            self._open_suite = None

    def _message(self, message_name: str, /, **attributes: str) -> None:
        attrs = "".join(f" {key}='{escape(value)}'" for key, value in attributes.items())
        self.write_line(f"##teamcity[{message_name}{attrs}]")


__all__ = ["TeamcityFormatter", "escape"]
