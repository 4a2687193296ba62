"""Text helpers shared by all formatters."""

from __future__ import annotations

import re

RED = "31"
GREEN = "32"
YELLOW = "33"
CYAN = "36"

_ASSET_PREFIX = re.compile(r"^http://127\.0\.0\.1:\d+/assets/")
_BODY_PARAM = re.compile(r"[?&]?body=1")


def pluralize(noun: str, count: int) -> str:
    """Return ``"1 example"`` or ``"2 examples"``."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def colorize(text: str, color_code: str | None, *, enabled: bool = True) -> str:
    """Wrap text in an ANSI color sequence when enabled."""
    if not enabled or not color_code:
        return text
    return f"\033[{color_code}m{text}\033[0m"


def filename(url: str) -> str:
    """Turn a served asset URL into a stable relative path.

    Strips the loopback server prefix and the ``body=1`` cache buster.
    """
    return _BODY_PARAM.sub("", _ASSET_PREFIX.sub("", url))


__all__ = ["CYAN", "GREEN", "RED", "YELLOW", "colorize", "filename", "pluralize"]
