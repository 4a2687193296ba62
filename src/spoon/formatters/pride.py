"""Dots in every color of the rainbow."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from spoon.formatters.dot import DotFormatter

if TYPE_CHECKING:
    from spoon.results import SpecResult


def rainbow(steps: int = 42) -> list[str]:
    """256-color ANSI codes cycling once through the spectrum."""
    third = math.pi * 2 / 3
    colors = []
    for n in range(steps):
        angle = n * (math.pi * 2 / steps)
        red = int(3 * math.sin(angle) + 3)
        green = int(3 * math.sin(angle + third) + 3)
        blue = int(3 * math.sin(angle + 2 * third) + 3)
        colors.append(f"38;5;{36 * red + 6 * green + blue + 16}")
    return colors


class PrideFormatter(DotFormatter):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._colors = rainbow()
        self._index = 0

    def render_passing_spec(self, result: SpecResult) -> None:
        self.write(self.passing_symbol, self._colors[self._index % len(self._colors)])
        self._index += 1


__all__ = ["PrideFormatter", "rainbow"]
