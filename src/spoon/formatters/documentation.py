"""Nested, human readable listing of suites and specs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spoon.formatters.dot import DotFormatter
from spoon.text import CYAN, GREEN, RED, YELLOW

if TYPE_CHECKING:
    from spoon.results import SpecResult, SuiteResult


class DocumentationFormatter(DotFormatter):
    """Prints every suite and spec, indented by nesting level.

    Console output of a spec is printed beneath it instead of inline.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._level = 0

    def render_suite_start(self, suite: SuiteResult) -> None:
        if suite.level == 0:
            self.write_line()
        self._level = suite.level
        self.write_line(self._indent(suite.label, suite.level))

    def render_passing_spec(self, result: SpecResult) -> None:
        self._write_spec_line(result.label, GREEN)

    def render_pending_spec(self, result: SpecResult) -> None:
        self._write_spec_line(f"{result.label} (PENDING)", YELLOW)

    def render_failing_spec(self, result: SpecResult) -> None:
        self._write_spec_line(f"{result.label} (FAILED - {len(self.summary.failures)})", RED)

    def render_console(self, message: str) -> None:
        pass

    def _write_spec_line(self, label: str, color_code: str) -> None:
        self.write_line(self._indent(label, self._level + 1), color_code)
        for line in self.console_output.splitlines():
            self.write_line(self._indent(f"# {line.strip()}", self._level + 2), CYAN)

    @staticmethod
    def _indent(value: str, level: int) -> str:
        return f"{'  ' * level}{value}"


__all__ = ["DocumentationFormatter"]
