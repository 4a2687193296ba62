"""Formatter protocol and the aggregating base formatter.

A formatter receives the lifecycle events of one run, strictly in arrival
order. :class:`BaseFormatter` keeps the run counters and categorized results
and hands each event to a ``render_*`` hook. Hooks are no-ops by default;
concrete formatters override only the ones their format needs.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, TextIO

from spoon import text
from spoon.config import get_config
from spoon.errors import ProtocolViolation
from spoon.results import RunSummary
from spoon.sinks import make_sink

if TYPE_CHECKING:
    from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult, SuiteResult

logger = logging.getLogger(__name__)


class FormatterState(Enum):
    """Where a formatter is in the run lifecycle."""

    CREATED = "created"
    RUN_STARTED = "run_started"
    SUITE_STARTED = "suite_started"
    SPEC_RECORDED = "spec_recorded"
    ERROR_RECORDED = "error_recorded"
    RESULT_REPORTED = "result_reported"
    COMPLETED = "completed"


class Formatter(Protocol):
    """Events every formatter accepts.

    ``log=False`` updates state without rendering anything.
    """

    def run_start(self, result: RunnerResult, log: bool = True) -> None:
        """Beginning of the run, before any suite."""
        ...

    def suite_start(self, suite: SuiteResult, log: bool = True) -> None:
        """Each suite, before its specs."""
        ...

    def spec_complete(self, result: SpecResult, log: bool = True) -> None:
        """Each spec, once it has finished."""
        ...

    def error_occurred(self, error: ErrorResult, log: bool = True) -> None:
        """An error not linked to any spec."""
        ...

    def exception_occurred(self, info: ErrorResult, log: bool = True) -> None:
        """A startup failure in the execution engine. The run ends after it."""
        ...

    def console_message(self, message: str, log: bool = True) -> None:
        """Console output from the spec currently running."""
        ...

    def coverage_report(self, message: str, log: bool = True) -> None:
        """Text version of the coverage report."""
        ...

    def threshold_failure(self, messages: Sequence[str], log: bool = True) -> None:
        """Coverage thresholds that were not met."""
        ...

    def result_reported(self, result: RunResult, log: bool = True) -> None:
        """Final report, after all specs."""
        ...

    def complete(self, failure_count: int, log: bool = True) -> None:
        """End of the run. No events are accepted afterwards."""
        ...


class BaseFormatter:
    """Aggregates one run and dispatches to rendering hooks.

    Args:
        suite_name: Name of the suite being run, used in rerun hints.
        output_file: Report file. Truncated here, appended to afterwards.
            Output goes to the console when omitted.
        color: Colorize console output. Defaults to the configured value.
        stream: Console stream, standard output when omitted.
    """

    def __init__(
        self,
        suite_name: str = "default",
        output_file: str | Path | None = None,
        *,
        color: bool | None = None,
        stream: TextIO | None = None,
    ) -> None:
        self.suite_name = str(suite_name)
        self.output_file = Path(output_file) if output_file else None
        self.sink = make_sink(self.output_file, stream)
        self.color = get_config().color if color is None else color
        self.summary = RunSummary()
        self.state = FormatterState.CREATED
        self.suite: SuiteResult | None = None
        self.last_suite: SuiteResult | None = None
        self._console: list[str] = []

    @property
    def console_output(self) -> str:
        """Console text produced by the spec currently running."""
        return "".join(self._console)

    def run_start(self, result: RunnerResult, log: bool = True) -> None:
        self._accept("run_start")
        if self.state is not FormatterState.CREATED:
            raise ProtocolViolation("run_start", self.state.value)
        self.summary.total_count = result.total
        self.state = FormatterState.RUN_STARTED
        if log:
            self.render_run_start(result)

    def suite_start(self, suite: SuiteResult, log: bool = True) -> None:
        self._accept("suite_start")
        self.suite = suite
        self.state = FormatterState.SUITE_STARTED
        if log:
            self.render_suite_start(suite)
        self.last_suite = suite

    def spec_complete(self, result: SpecResult, log: bool = True) -> None:
        self._accept("spec_complete")
        self.summary.record(result)
        if 0 < self.summary.total_count < self.summary.completed_count:
            logger.warning(
                "Completed %d specs but the run announced %d",
                self.summary.completed_count,
                self.summary.total_count,
            )
        self.state = FormatterState.SPEC_RECORDED
        if log:
            self.render_spec(result)
        self._console.clear()

    def error_occurred(self, error: ErrorResult, log: bool = True) -> None:
        self._accept("error_occurred")
        self.summary.errors.append(error)
        self.state = FormatterState.ERROR_RECORDED
        if log:
            self.render_error(error)

    def exception_occurred(self, info: ErrorResult, log: bool = True) -> None:
        self._accept("exception_occurred")
        if log:
            self.render_exception(info)

    def console_message(self, message: str, log: bool = True) -> None:
        self._accept("console_message")
        self._console.append(message)
        if log:
            self.render_console(message)

    def coverage_report(self, message: str, log: bool = True) -> None:
        self._accept("coverage_report")
        if log:
            self.render_coverage(message)

    def threshold_failure(self, messages: Sequence[str], log: bool = True) -> None:
        self._accept("threshold_failure")
        if log:
            self.render_threshold_failure(list(messages))

    def result_reported(self, result: RunResult, log: bool = True) -> None:
        self._accept("result_reported")
        self.state = FormatterState.RESULT_REPORTED
        if log:
            self.render_result(result)

    def complete(self, failure_count: int, log: bool = True) -> None:
        self._accept("complete")
        self.state = FormatterState.COMPLETED
        if log:
            self.render_complete(failure_count)

    def _accept(self, event: str) -> None:
        if self.state is FormatterState.COMPLETED:
            raise ProtocolViolation(event, self.state.value)

    # Rendering hooks

    def render_run_start(self, result: RunnerResult) -> None:
        pass

    def render_suite_start(self, suite: SuiteResult) -> None:
        pass

    def render_spec(self, result: SpecResult) -> None:
        if result.passing:
            self.render_passing_spec(result)
        elif result.pending:
            self.render_pending_spec(result)
        else:
            self.render_failing_spec(result)

    def render_passing_spec(self, result: SpecResult) -> None:
        pass

    def render_pending_spec(self, result: SpecResult) -> None:
        pass

    def render_failing_spec(self, result: SpecResult) -> None:
        pass

    def render_error(self, error: ErrorResult) -> None:
        pass

    def render_exception(self, info: ErrorResult) -> None:
        pass

    def render_console(self, message: str) -> None:
        pass

    def render_coverage(self, message: str) -> None:
        pass

    def render_threshold_failure(self, messages: list[str]) -> None:
        pass

    def render_result(self, result: RunResult) -> None:
        pass

    def render_complete(self, failure_count: int) -> None:
        pass

    # Output helpers

    def write(self, value: str, color_code: str | None = None) -> None:
        self.sink.write_raw(self.colorize(value, color_code))

    def write_line(self, value: str = "", color_code: str | None = None) -> None:
        self.sink.write_line(self.colorize(value, color_code))

    def colorize(self, value: str, color_code: str | None) -> str:
        """Colorize for the console only, and only when color is on."""
        return text.colorize(value, color_code, enabled=self.color and self.sink.supports_color)

    @staticmethod
    def pluralize(noun: str, count: int) -> str:
        return text.pluralize(noun, count)

    @staticmethod
    def filename(url: str) -> str:
        return text.filename(url)


__all__ = ["BaseFormatter", "Formatter", "FormatterState"]
