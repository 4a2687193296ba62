"""Tests for spoon.events module."""

import json
import logging

import pytest

from factories import RecordingFormatter
from spoon.errors import RunnerError
from spoon.events import EventStream, parse_event


def event(event_type, **fields):
    return json.dumps({"_spoon": True, "type": event_type, **fields})


class TestParseEvent:
    """Tests for parse_event."""

    def test_event_line(self):
        assert parse_event(event("runner", total=3)) == {"_spoon": True, "type": "runner", "total": 3}

    @pytest.mark.parametrize(
        "line",
        [
            "plain console output",
            "{not json",
            '{"type": "runner"}',
            "[1, 2, 3]",
            "",
        ],
    )
    def test_plain_output(self, line):
        assert parse_event(line) is None


class TestEventStream:
    """Tests for EventStream."""

    def test_full_run(self, recording_formatter):
        lines = [
            event("runner", total=3),
            event("suite", label="Models"),
            "console from spec\n",
            event("spec", description="Model saves", status="passed"),
            event("spec", description="Model loads", status="pending"),
            event("spec", description="Model fails", status="failed", message="boom"),
            event("result", elapsed=0.3),
            event("complete"),
        ]

        failures = EventStream(recording_formatter).process_lines(lines)

        assert failures == 1
        assert recording_formatter.hooks == [
            "run_start",
            "suite_start",
            "console",
            "passing_spec",
            "pending_spec",
            "failing_spec",
            "result",
            "complete",
        ]
        assert recording_formatter.calls[2] == ("console", "console from spec\n")
        assert recording_formatter.calls[-1] == ("complete", 1)

    def test_finish_completes_once(self, recording_formatter):
        stream = EventStream(recording_formatter)

        stream.process(event("runner", total=0))
        assert stream.finish() == 0
        assert stream.finish() == 0

        assert recording_formatter.hooks == ["run_start", "complete"]
        assert stream.finished

    def test_suppress_log(self, recording_formatter):
        stream = EventStream(recording_formatter, suppress_log=True)

        stream.process("noisy output")
        stream.process(event("console", message="also noisy"))
        stream.process(event("spec", description="a"))

        assert recording_formatter.hooks == ["passing_spec"]

    def test_console_buffered_even_when_suppressed(self):
        seen = []

        class BufferFormatter(RecordingFormatter):
            def render_passing_spec(self, result):
                seen.append(self.console_output)

        stream = EventStream(BufferFormatter(), suppress_log=True)
        stream.process("captured")
        stream.process(event("spec", description="a"))

        assert seen == ["captured"]

    def test_error_event(self, recording_formatter):
        EventStream(recording_formatter).handle(
            {"type": "error", "message": "boom", "trace": [{"file": "a.js", "line": 4}]}
        )

        (error,) = recording_formatter.summary.errors
        assert error.origin == "a.js:4"

    def test_exception_raises_runner_error(self, recording_formatter):
        stream = EventStream(recording_formatter)

        with pytest.raises(RunnerError, match="phantomjs not found"):
            stream.process(event("exception", message="phantomjs not found"))

        assert recording_formatter.hooks == ["exception"]

    def test_coverage_and_thresholds(self, recording_formatter):
        stream = EventStream(recording_formatter)

        stream.process(event("coverage", message="Statements: 75%"))
        stream.process(event("threshold_failure", messages=["too low"]))

        assert recording_formatter.calls == [
            ("coverage", "Statements: 75%"),
            ("threshold_failure", ["too low"]),
        ]

    @pytest.mark.parametrize("trace", ["a string", {"file": "a.js", "line": 1}, [42]])
    def test_malformed_trace_dropped(self, recording_formatter, caplog, trace):
        stream = EventStream(recording_formatter)

        with caplog.at_level(logging.WARNING, logger="spoon.events"):
            stream.process(event("error", message="boom", trace=trace))

        assert recording_formatter.summary.errors == []
        assert "Dropping malformed error event" in caplog.text

    def test_malformed_event_dropped(self, recording_formatter, caplog):
        stream = EventStream(recording_formatter)

        with caplog.at_level(logging.WARNING, logger="spoon.events"):
            stream.process(event("runner", total=-5))
            stream.process(event("suite"))

        assert recording_formatter.calls == []
        assert "Dropping malformed runner event" in caplog.text

    def test_unknown_event_type_ignored(self, recording_formatter, caplog):
        with caplog.at_level(logging.WARNING, logger="spoon.events"):
            EventStream(recording_formatter).process(event("heartbeat"))

        assert recording_formatter.calls == []
        assert "heartbeat" in caplog.text

    def test_events_after_complete_logged(self, recording_formatter, caplog):
        stream = EventStream(recording_formatter)
        stream.process(event("complete"))

        with caplog.at_level(logging.WARNING, logger="spoon.events"):
            stream.process(event("spec", description="late"))

        assert recording_formatter.summary.completed_count == 0
        assert "received in state 'completed'" in caplog.text
