"""Test Anything Protocol output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult


class TapFormatter(BaseFormatter):
    def render_run_start(self, result: RunnerResult) -> None:
        self.write_line(f"1..{result.total}")

    def render_passing_spec(self, result: SpecResult) -> None:
        self.write_line(f"ok {self.summary.completed_count} - {result.description}")
        self._write_console()

    def render_pending_spec(self, result: SpecResult) -> None:
        self.write_line(f"ok {self.summary.completed_count} - [pending] {result.description}")
        self._write_console()

    def render_failing_spec(self, result: SpecResult) -> None:
        self.write_line(f"not ok {self.summary.completed_count} - {result.description}")
        self.write_line(f"  FAIL {result.message or ''}".rstrip())
        self._write_console()

    def render_error(self, error: ErrorResult) -> None:
        self._write_diagnostic(f"ERROR {error.message}")
        if error.origin:
            self._write_diagnostic(f"  at {self.filename(error.origin)}")

    def render_exception(self, info: ErrorResult) -> None:
        self.write_line(f"Bail out! {info.message}")

    def render_result(self, result: RunResult) -> None:
        summary = self.summary
        self._write_diagnostic(
            f"{self.pluralize('test', summary.completed_count)}, "
            f"{self.pluralize('failure', len(summary.failures))}, "
            f"{len(summary.pendings)} pending"
        )

    def render_coverage(self, message: str) -> None:
        self._write_diagnostic(message)

    def render_threshold_failure(self, messages: list[str]) -> None:
        for message in messages:
            self._write_diagnostic(message)

    def _write_console(self) -> None:
        for line in self.console_output.splitlines():
            self.write_line(f"  # {line}")

    def _write_diagnostic(self, message: str) -> None:
        for line in message.splitlines() or [""]:
            self.write_line(f"# {line}".rstrip())


__all__ = ["TapFormatter"]
