"""A standalone HTML page in the style of RSpec's HTML formatter."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING, Any

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from spoon.results import ErrorResult, RunnerResult, RunResult, SpecResult, SuiteResult

_STYLE = """\
body { font: 12px/1.4 sans-serif; margin: 0; }
#header { padding: 10px; color: #fff; background: #65c400; }
#header.failed { background: #c40d0d; }
#header.pending { background: #faf834; color: #000; }
.suite { margin: 5px 10px; }
.suite dt { font-weight: bold; padding: 3px; background: #eee; }
dd.example { margin-left: 0; padding: 3px 3px 3px 20px; }
dd.passed { border-left: 5px solid #65c400; }
dd.pending { border-left: 5px solid #faf834; }
dd.failed { border-left: 5px solid #c20000; color: #c20000; }
pre { margin: 4px 0; white-space: pre-wrap; }
.error { margin: 5px 10px; color: #c20000; }
"""


class RspecHtmlFormatter(BaseFormatter):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._suite_open = False

    def render_run_start(self, result: RunnerResult) -> None:
        self.write_line("<!DOCTYPE html>")
        self.write_line("<html>")
        self.write_line("<head>")
        self.write_line('<meta charset="utf-8">')
        self.write_line(f"<title>{escape(self.suite_name)} results</title>")
        self.write_line(f"<style>\n{_STYLE}</style>")
        self.write_line("</head>")
        self.write_line("<body>")
        self.write_line(f'<div id="header"><h1>{escape(self.suite_name)}</h1></div>')
        self.write_line('<div id="results">')

    def render_suite_start(self, suite: SuiteResult) -> None:
        self._end_suite()
        self.write_line(f'<div class="suite level-{suite.level}">')
        self.write_line(f"<dl><dt>{escape(suite.label)}</dt>")
        self._suite_open = True

    def render_passing_spec(self, result: SpecResult) -> None:
        self._write_example(result, "passed")

    def render_pending_spec(self, result: SpecResult) -> None:
        self._write_example(result, "pending", "(PENDING: Not yet implemented)")

    def render_failing_spec(self, result: SpecResult) -> None:
        details = [f'<pre class="message">{escape(result.message or "")}</pre>']
        if result.trace:
            details.append(f'<pre class="trace">{escape(result.trace)}</pre>')
        self._write_example(result, "failed", *details)

    def render_error(self, error: ErrorResult) -> None:
        origin = f" ({escape(self.filename(error.origin))})" if error.origin else ""
        self.write_line(f'<div class="error">{escape(error.message)}{origin}</div>')

    def render_coverage(self, message: str) -> None:
        self.write_line(f'<pre class="coverage">{escape(message)}</pre>')

    def render_threshold_failure(self, messages: list[str]) -> None:
        for message in messages:
            self.write_line(f'<div class="error">{escape(message)}</div>')

    def render_result(self, result: RunResult) -> None:
        self._end_suite()
        summary = self.summary
        status = "failed" if summary.failures else "pending" if summary.pendings else "passed"
        totals = (
            f"{self.pluralize('example', summary.completed_count)}, "
            f"{self.pluralize('failure', len(summary.failures))}, "
            f"{len(summary.pendings)} pending"
        )
        elapsed = result.elapsed if result.elapsed is not None else 0
        self.write_line(f'<div id="summary" class="{status}">')
        self.write_line(f"<p>{totals}</p>")
        self.write_line(f"<p>Finished in {elapsed} seconds</p>")
        self.write_line("</div>")
        self.write_line(
            f"<script>document.getElementById('header').className = '{status}';</script>"
        )

    def render_complete(self, failure_count: int) -> None:
        self._end_suite()
        self.write_line("</div>")
        self.write_line("</body>")
        self.write_line("</html>")

    def _write_example(self, result: SpecResult, status: str, *details: str) -> None:
        self.write_line(f'<dd class="example {status}">')
        self.write_line(f'<span class="spec-name">{escape(result.label)}</span>')
        for detail in details:
            self.write_line(detail)
        if self.console_output:
            self.write_line(f'<pre class="console">{escape(self.console_output)}</pre>')
        self.write_line("</dd>")

    def _end_suite(self) -> None:
        if self._suite_open:
            self.write_line("</dl>")
            self.write_line("</div>")
            self._suite_open = False


__all__ = ["RspecHtmlFormatter"]
