"""Fan one event stream out to several formatters."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from spoon.errors import ProtocolViolation

if TYPE_CHECKING:
    from spoon.formatters.base import Formatter
    from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult, SuiteResult


@dataclass
class _Entry:
    formatter: Formatter
    log: bool = True


class CompositeFormatter:
    """Forwards every event, in order, to each sub-formatter.

    Each sub-formatter keeps its own counts. An entry added with
    ``log=False`` is kept up to date but never renders.
    """

    def __init__(self, formatters: Iterable[Formatter] = ()) -> None:
        self._entries: list[_Entry] = [_Entry(f) for f in formatters]
        self.completed = False

    def add(self, formatter: Formatter, *, log: bool = True) -> None:
        self._entries.append(_Entry(formatter, log))

    @property
    def formatters(self) -> list[Formatter]:
        return [entry.formatter for entry in self._entries]

    def __iter__(self) -> Iterator[Formatter]:
        return iter(self.formatters)

    def __len__(self) -> int:
        return len(self._entries)

    def _forward(self, event: str, payload: object, log: bool) -> None:
        if self.completed:
            raise ProtocolViolation(event, "completed")
        for entry in self._entries:
            getattr(entry.formatter, event)(payload, log=log and entry.log)

    def run_start(self, result: RunnerResult, log: bool = True) -> None:
        self._forward("run_start", result, log)

    def suite_start(self, suite: SuiteResult, log: bool = True) -> None:
        self._forward("suite_start", suite, log)

    def spec_complete(self, result: SpecResult, log: bool = True) -> None:
        self._forward("spec_complete", result, log)

    def error_occurred(self, error: ErrorResult, log: bool = True) -> None:
        self._forward("error_occurred", error, log)

    def exception_occurred(self, info: ErrorResult, log: bool = True) -> None:
        self._forward("exception_occurred", info, log)

    def console_message(self, message: str, log: bool = True) -> None:
        self._forward("console_message", message, log)

    def coverage_report(self, message: str, log: bool = True) -> None:
        self._forward("coverage_report", message, log)

    def threshold_failure(self, messages: Sequence[str], log: bool = True) -> None:
        self._forward("threshold_failure", messages, log)

    def result_reported(self, result: RunResult, log: bool = True) -> None:
        self._forward("result_reported", result, log)

    def complete(self, failure_count: int, log: bool = True) -> None:
        self._forward("complete", failure_count, log)
        self.completed = True


__all__ = ["CompositeFormatter"]
