"""One JSON object per event.

The output uses the same line protocol :class:`spoon.events.EventStream`
reads, so a report written by this formatter can be replayed.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from pydantic import BaseModel

    from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult, SuiteResult


class JsonFormatter(BaseFormatter):
    def render_run_start(self, result: RunnerResult) -> None:
        self._write_event("runner", result)

    def render_suite_start(self, suite: SuiteResult) -> None:
        self._write_event("suite", suite)

    def render_spec(self, result: SpecResult) -> None:
        self._write_event("spec", result)

    def render_error(self, error: ErrorResult) -> None:
        self._write_event("error", error)

    def render_exception(self, info: ErrorResult) -> None:
        self._write_event("exception", info)

    def render_console(self, message: str) -> None:
        self._write_event("console", message=message)

    def render_coverage(self, message: str) -> None:
        self._write_event("coverage", message=message)

    def render_threshold_failure(self, messages: list[str]) -> None:
        self._write_event("threshold_failure", messages=messages)

    def render_result(self, result: RunResult) -> None:
        self._write_event("result", result)

    def render_complete(self, failure_count: int) -> None:
        self._write_event("complete", failure_count=failure_count)

    def _write_event(self, event_type: str, payload: BaseModel | None = None, **fields: Any) -> None:
        data: dict[str, Any] = {"_spoon": True, "type": event_type}
        if payload is not None:
            data.update(payload.model_dump(mode="json"))
        data.update(fields)
        self.write_line(json.dumps(data))


__all__ = ["JsonFormatter"]
