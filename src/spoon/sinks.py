"""Output sinks: where a formatter's text ends up.

A formatter is bound to exactly one sink for its whole life. The file sink
truncates its file once, when it is created, and afterwards opens, appends
and closes on every write so that everything written so far survives an
abrupt exit.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol, TextIO

from spoon.errors import FileWriteError

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    """Interface shared by all sinks."""

    @property
    def supports_color(self) -> bool:
        """Whether ANSI color codes make sense on this sink."""
        ...

    def write_raw(self, text: str) -> None:
        """Write text as is."""
        ...

    def write_line(self, text: str = "") -> None:
        """Write text followed by a newline."""
        ...


class FileSink:
    """Append-only report file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("", encoding="utf-8")
        except OSError as exc:
            raise FileWriteError(self.path, exc) from exc
        logger.debug("Truncated report file %s", self.path)

    @property
    def supports_color(self) -> bool:
        return False

    def write_raw(self, text: str) -> None:
        try:
            with self.path.open("a", encoding="utf-8") as f:
                f.write(text)
        except OSError as exc:
            raise FileWriteError(self.path, exc) from exc

    def write_line(self, text: str = "") -> None:
        self.write_raw(f"{text}\n")


class ConsoleSink:
    """Writes to a stream, standard output unless told otherwise.

    The default stream is looked up on every write so that stream
    replacement (output capture) is honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    @property
    def supports_color(self) -> bool:
        return True

    def write_raw(self, text: str) -> None:
        stream = self.stream
        stream.write(text)
        stream.flush()

    def write_line(self, text: str = "") -> None:
        self.write_raw(f"{text}\n")


def make_sink(output_file: str | Path | None = None, stream: TextIO | None = None) -> OutputSink:
    """Return a file sink when a path is given, a console sink otherwise."""
    if output_file:
        return FileSink(output_file)
    return ConsoleSink(stream)


__all__ = ["ConsoleSink", "FileSink", "OutputSink", "make_sink"]
