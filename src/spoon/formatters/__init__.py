"""Formatters turn run events into reports.

Concrete formatters are loaded on demand through the registry, so only the
base classes are imported here.
"""

from spoon.formatters.base import BaseFormatter, Formatter, FormatterState
from spoon.formatters.composite import CompositeFormatter

__all__ = [
    "BaseFormatter",
    "CompositeFormatter",
    "Formatter",
    "FormatterState",
]
