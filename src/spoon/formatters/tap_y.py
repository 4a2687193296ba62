"""TAP-Y: a stream of YAML documents, as read by tapout."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import yaml

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from spoon.results import RunnerResult, RunResult, SpecResult, SuiteResult

_STATUS = {"passed": "pass", "pending": "todo", "failed": "fail"}


class TapYFormatter(BaseFormatter):
    def render_run_start(self, result: RunnerResult) -> None:
        self._write_document(
            {"type": "suite", "start": result.start, "count": result.total, "rev": 4}
        )

    def render_suite_start(self, suite: SuiteResult) -> None:
        self._write_document(
            {"type": "case", "subtype": "", "label": suite.label, "level": suite.level}
        )

    def render_spec(self, result: SpecResult) -> None:
        document: dict[str, Any] = {
            "type": "test",
            "subtype": "",
            "status": _STATUS[result.status.value],
            "label": result.label,
            "filter": result.link,
        }
        if result.elapsed is not None:
            document["time"] = result.elapsed
        if result.failing:
            document["exception"] = {
                "message": result.message or "",
                "file": result.location,
                "backtrace": (result.trace or "").splitlines(),
            }
        if self.console_output:
            document["stdout"] = self.console_output
        self._write_document(document)

    def render_result(self, result: RunResult) -> None:
        summary = self.summary
        self._write_document(
            {
                "type": "final",
                "time": result.elapsed,
                "counts": {
                    "total": summary.completed_count,
                    "pass": len(summary.passes),
                    "fail": len(summary.failures),
                    "error": len(summary.errors),
                    "omit": 0,
                    "todo": len(summary.pendings),
                },
            }
        )

    def render_complete(self, failure_count: int) -> None:
        self.write_line("...")

    def _write_document(self, document: dict[str, Any]) -> None:
        self.write(yaml.safe_dump(document, explicit_start=True, sort_keys=False))


__all__ = ["TapYFormatter"]
