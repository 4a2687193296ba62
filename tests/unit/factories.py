"""Builders shared by the unit tests."""

from spoon.formatters.base import BaseFormatter
from spoon.results import RunnerResult, RunResult, SpecResult, SpecStatus, SuiteResult


class RecordingFormatter(BaseFormatter):
    """Formatter that records which hooks ran."""

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("color", False)
        super().__init__(*args, **kwargs)
        self.calls = []

    def render_run_start(self, result):
        self.calls.append(("run_start", result))

    def render_suite_start(self, suite):
        self.calls.append(("suite_start", suite))

    def render_passing_spec(self, result):
        self.calls.append(("passing_spec", result))

    def render_pending_spec(self, result):
        self.calls.append(("pending_spec", result))

    def render_failing_spec(self, result):
        self.calls.append(("failing_spec", result))

    def render_error(self, error):
        self.calls.append(("error", error))

    def render_exception(self, info):
        self.calls.append(("exception", info))

    def render_console(self, message):
        self.calls.append(("console", message))

    def render_coverage(self, message):
        self.calls.append(("coverage", message))

    def render_threshold_failure(self, messages):
        self.calls.append(("threshold_failure", messages))

    def render_result(self, result):
        self.calls.append(("result", result))

    def render_complete(self, failure_count):
        self.calls.append(("complete", failure_count))

    @property
    def hooks(self):
        return [name for name, _ in self.calls]


def passing(description: str, **kwargs) -> SpecResult:
    return SpecResult(description=description, status=SpecStatus.PASSED, **kwargs)


def pending(description: str, **kwargs) -> SpecResult:
    return SpecResult(description=description, status=SpecStatus.PENDING, **kwargs)


def failing(description: str, message: str = "expected true to equal false", **kwargs) -> SpecResult:
    return SpecResult(description=description, status=SpecStatus.FAILED, message=message, **kwargs)


def run_events(formatter, specs, *, total=None, suite="Integration tests", elapsed=0.5):
    """Drive a formatter through a whole run."""
    formatter.run_start(RunnerResult(total=len(specs) if total is None else total))
    formatter.suite_start(SuiteResult(label=suite))
    for spec in specs:
        formatter.spec_complete(spec)
    formatter.result_reported(RunResult(elapsed=elapsed))
    formatter.complete(sum(1 for spec in specs if spec.failing))
