"""Spoon - formatter registry and result aggregation for browser test runs."""

from .errors import (
    ConfigurationError,
    DuplicateNameError,
    FileWriteError,
    ProtocolViolation,
    RunnerError,
    SpoonError,
    UnknownFormatterError,
)
from .events import EventStream
from .formatters import BaseFormatter, CompositeFormatter, Formatter, FormatterState
from .registry import (
    FormatterDescriptor,
    FormatterRegistry,
    build_formatter,
    build_formatters,
    formatter,
    get_formatter_registry,
    reset_formatter_registry,
)
from .results import (
    ErrorResult,
    RunnerResult,
    RunResult,
    RunSummary,
    SpecResult,
    SpecStatus,
    SuiteResult,
    TraceFrame,
)
from .version import __version__


__all__ = [
    # Registry
    "FormatterDescriptor",
    "FormatterRegistry",
    "build_formatter",
    "build_formatters",
    "formatter",
    "get_formatter_registry",
    "reset_formatter_registry",
    # Engine
    "BaseFormatter",
    "CompositeFormatter",
    "EventStream",
    "Formatter",
    "FormatterState",
    # Results
    "ErrorResult",
    "RunResult",
    "RunSummary",
    "RunnerResult",
    "SpecResult",
    "SpecStatus",
    "SuiteResult",
    "TraceFrame",
    # Errors
    "ConfigurationError",
    "DuplicateNameError",
    "FileWriteError",
    "ProtocolViolation",
    "RunnerError",
    "SpoonError",
    "UnknownFormatterError",
    "__version__",
]
