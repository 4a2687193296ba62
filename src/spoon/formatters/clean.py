"""Dots without the rerun commands."""

from __future__ import annotations

from spoon.formatters.dot import DotFormatter


class CleanFormatter(DotFormatter):
    def write_failed_examples(self) -> None:
        pass


__all__ = ["CleanFormatter"]
