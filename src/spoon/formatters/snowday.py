"""Dots for a cold day."""

from __future__ import annotations

from spoon.formatters.dot import DotFormatter


class SnowdayFormatter(DotFormatter):
    passing_symbol = "☃"
    pending_symbol = "❄"
    failing_symbol = "☠"


__all__ = ["SnowdayFormatter"]
