"""Dots, then a quote to guess the author of."""

from __future__ import annotations

import random
from typing import Any

from spoon.formatters.dot import DotFormatter
from spoon.text import CYAN

SWAYZE = "Patrick Swayze"
OPRAH = "Oprah Winfrey"

QUOTES: tuple[tuple[str, str], ...] = (
    ("Nobody puts Baby in a corner.", SWAYZE),
    ("Pain don't hurt.", SWAYZE),
    ("Be nice.", SWAYZE),
    ("Turn your wounds into wisdom.", OPRAH),
    ("The biggest adventure you can take is to live the life of your dreams.", OPRAH),
    ("You get a car! You get a car! Everybody gets a car!", OPRAH),
)


class SwayzeOrOprahFormatter(DotFormatter):
    """The dot report followed by a quote from Patrick Swayze or Oprah Winfrey.

    Pass ``seed`` to make the choice of quote reproducible.
    """

    def __init__(self, *args: Any, seed: int | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._random = random.Random(seed)

    def render_complete(self, failure_count: int) -> None:
        quote, author = self._random.choice(QUOTES)
        self.write_line()
        self.write_line(f'"{quote}"')
        self.write_line(f"  -- {SWAYZE} or {OPRAH}? It was {author}.", CYAN)


__all__ = ["QUOTES", "SwayzeOrOprahFormatter"]
