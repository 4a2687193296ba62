"""JUnit XML, as understood by most CI servers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from xml.sax.saxutils import quoteattr

from spoon.formatters.base import BaseFormatter

if TYPE_CHECKING:
    from spoon.results import RunnerResult, RunResult, SpecResult, SuiteResult


def cdata(value: str) -> str:
    """Wrap text in a CDATA section, splitting any ``]]>`` it contains."""
    return "<![CDATA[" + value.replace("]]>", "]]]]><![CDATA[>") + "]]>"


class JunitFormatter(BaseFormatter):
    """Writes ``testsuites > testsuite > testsuite > testcase``.

    The outer suite is the run, the inner ones are the suites reported by
    the runner. The document is closed on ``complete``.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._suite_open = False

    def render_run_start(self, result: RunnerResult) -> None:
        self.write_line('<?xml version="1.0" encoding="UTF-8"?>')
        self.write_line('<testsuites name="spoon">')
        attrs = f"name={quoteattr(self.suite_name)} tests=\"{result.total}\""
        if result.start:
            attrs += f" timestamp={quoteattr(result.start)}"
        self.write_line(f"<testsuite {attrs}>")

    def render_suite_start(self, suite: SuiteResult) -> None:
        self._end_suite()
        self.write_line(f"<testsuite name={quoteattr(suite.label)}>")
        self._suite_open = True

    def render_passing_spec(self, result: SpecResult) -> None:
        self._write_testcase(result)

    def render_pending_spec(self, result: SpecResult) -> None:
        self._write_testcase(result, "  <skipped/>")

    def render_failing_spec(self, result: SpecResult) -> None:
        message = result.message or ""
        body = cdata(result.trace or message)
        self._write_testcase(
            result,
            f'  <failure type="AssertionFailed" message={quoteattr(message)}>{body}</failure>',
        )

    def render_result(self, result: RunResult) -> None:
        self._end_suite()

    def render_complete(self, failure_count: int) -> None:
        self._end_suite()
        if self.summary.errors:
            messages = "\n".join(error.message for error in self.summary.errors)
            self.write_line(f"<system-err>{cdata(messages)}</system-err>")
        self.write_line("</testsuite>")
        self.write_line("</testsuites>")

    def _write_testcase(self, result: SpecResult, *children: str) -> None:
        attrs = f"classname={quoteattr(result.suite or self.suite_name)} name={quoteattr(result.label)}"
        if result.elapsed is not None:
            attrs += f' time="{result.elapsed:.3f}"'
        self.write_line(f"<testcase {attrs}>")
        for child in children:
            self.write_line(child)
        if self.console_output:
            self.write_line(f"  <system-out>{cdata(self.console_output)}</system-out>")
        self.write_line("</testcase>")

    def _end_suite(self) -> None:
        if self._suite_open:
            self.write_line("</testsuite>")
            self._suite_open = False


__all__ = ["JunitFormatter", "cdata"]
