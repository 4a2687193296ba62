"""One character per spec, details at the end."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from spoon.config import get_config
from spoon.formatters.base import BaseFormatter
from spoon.text import CYAN, GREEN, RED, YELLOW

if TYPE_CHECKING:
    from spoon.results import ErrorResult, RunResult, SpecResult


class DotFormatter(BaseFormatter):
    """The default console formatter.

    Prints ``.``, ``*`` or ``F`` as specs finish, then the pending specs, the
    failures, the totals and a rerun command for every failed example.
    """

    passing_symbol = "."
    pending_symbol = "*"
    failing_symbol = "F"

    def __init__(self, *args: Any, rerun_command: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.rerun_command = rerun_command or get_config().rerun_command

    def render_passing_spec(self, result: SpecResult) -> None:
        self.write(self.passing_symbol, GREEN)

    def render_pending_spec(self, result: SpecResult) -> None:
        self.write(self.pending_symbol, YELLOW)

    def render_failing_spec(self, result: SpecResult) -> None:
        self.write(self.failing_symbol, RED)

    def render_error(self, error: ErrorResult) -> None:
        self.write_line(error.message, RED)
        self.write_trace(error)
        self.write_line()

    def render_exception(self, info: ErrorResult) -> None:
        self.write_line(info.message, RED)
        self.write_trace(info)

    def render_console(self, message: str) -> None:
        self.write(message)

    def render_result(self, result: RunResult) -> None:
        self.write_information()
        self.write_stats(result)
        self.write_failed_examples()

    def render_coverage(self, message: str) -> None:
        self.write_line(f"\n{message}")

    def render_threshold_failure(self, messages: list[str]) -> None:
        for message in messages:
            self.write_line(message, RED)
        self.write_line()

    def write_trace(self, error: ErrorResult) -> None:
        for frame in error.trace:
            line = f"  # {self.filename(frame.file)}"
            if frame.line is not None:
                line += f":{frame.line}"
            if frame.function:
                line += f" -- {frame.function}"
            self.write_line(line, CYAN)

    def write_information(self) -> None:
        self.write_line("\n" if self.summary.completed_count else "")
        if self.summary.pendings:
            self.write_pending()
        if self.summary.failures:
            self.write_failures()

    def write_pending(self) -> None:
        self.write_line("Pending:")
        for result in self.summary.pendings:
            self.write_line(f"  {result.description}", YELLOW)
            self.write_line("    # Not yet implemented\n", CYAN)

    def write_failures(self) -> None:
        self.write_line("Failures:\n")
        for index, failure in enumerate(self.summary.failures, start=1):
            self.write_line(f"  {index}) {failure.description}")
            self.write_line(f"     Failure/Error: {failure.message}\n", RED)

    def write_stats(self, result: RunResult) -> None:
        elapsed = result.elapsed if result.elapsed is not None else 0
        self.write_line(f"Finished in {elapsed} seconds")
        stats = (
            f"{self.pluralize('example', self.summary.completed_count)}, "
            f"{self.pluralize('failure', len(self.summary.failures))}"
        )
        if self.summary.pendings:
            stats += f", {len(self.summary.pendings)} pending"
        self.write_line(stats, self.stats_color())

    def stats_color(self) -> str:
        if self.summary.failures:
            return RED
        if self.summary.pendings:
            return YELLOW
        return GREEN

    def write_failed_examples(self) -> None:
        if not self.summary.failures:
            return
        self.write_line("\nFailed examples:\n")
        for failure in self.summary.failures:
            command = f'{self.rerun_command} -s {self.suite_name} --filter="{failure.link}"'
            self.write_line(command, RED)


__all__ = ["DotFormatter"]
