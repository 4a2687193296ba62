"""Decode runner output and drive a formatter.

The execution engine prints one JSON object per line for every lifecycle
event, marked with ``"_spoon": true``. Anything else it prints is console
output from the code under test.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from spoon.errors import ProtocolViolation, RunnerError
from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult, SuiteResult

if TYPE_CHECKING:
    from spoon.formatters.base import Formatter

logger = logging.getLogger(__name__)

EVENT_TYPES = (
    "runner",
    "suite",
    "spec",
    "error",
    "exception",
    "console",
    "coverage",
    "threshold_failure",
    "result",
    "complete",
)


def parse_event(line: str) -> dict[str, Any] | None:
    """Return the event carried by ``line``, or None for plain output."""
    stripped = line.strip()
    if not stripped.startswith("{"):
        return None
    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, dict) or not data.get("_spoon"):
        return None
    return data


class EventStream:
    """Feeds decoded events to one formatter, in arrival order.

    Args:
        formatter: Usually a :class:`~spoon.formatters.CompositeFormatter`.
        suppress_log: Keep console output out of the reports.
    """

    def __init__(self, formatter: Formatter, *, suppress_log: bool = False) -> None:
        self.formatter = formatter
        self.suppress_log = suppress_log
        self.failure_count = 0
        self.finished = False

    def process(self, line: str) -> None:
        """Handle one line of runner output."""
        event = parse_event(line)
        if event is None:
            self._forward("console_message", line)
            return
        self.handle(event)

    def process_lines(self, lines: Iterable[str]) -> int:
        """Handle every line, then finish the run."""
        for line in lines:
            self.process(line)
        return self.finish()

    def handle(self, event: dict[str, Any]) -> None:
        """Validate an event payload and call the matching formatter event."""
        event_type = event.get("type")
        try:
            self._dispatch(event_type, event)
        except ValidationError as exc:
            logger.warning("Dropping malformed %s event: %s", event_type, exc)

    def finish(self) -> int:
        """Complete the run and return the number of failed specs."""
        if not self.finished:
            self._forward("complete", self.failure_count)
        return self.failure_count

    def _dispatch(self, event_type: Any, event: dict[str, Any]) -> None:
        match event_type:
            case "runner":
                self._forward("run_start", RunnerResult.model_validate(event))
            case "suite":
                self._forward("suite_start", SuiteResult.model_validate(event))
            case "spec":
                result = SpecResult.model_validate(event)
                if result.failing:
                    self.failure_count += 1
                self._forward("spec_complete", result)
            case "error":
                self._forward("error_occurred", ErrorResult.model_validate(event))
            case "exception":
                info = ErrorResult.model_validate(event)
                self._forward("exception_occurred", info)
                raise RunnerError(info.message)
            case "console":
                self._forward("console_message", str(event.get("message", "")))
            case "coverage":
                self._forward("coverage_report", str(event.get("message", "")))
            case "threshold_failure":
                messages = event.get("messages") or []
                self._forward("threshold_failure", [str(m) for m in messages])
            case "result":
                self._forward("result_reported", RunResult.model_validate(event))
            case "complete":
                self.finish()
            case _:
                logger.warning("Ignoring unknown event type %r", event_type)

    def _forward(self, event: str, payload: Any) -> None:
        log = not (self.suppress_log and event == "console_message")
        try:
            getattr(self.formatter, event)(payload, log=log)
        except ProtocolViolation as exc:
            logger.warning("%s", exc)
            return
        if event == "complete":
            self.finished = True


__all__ = ["EVENT_TYPES", "EventStream", "parse_event"]
