"""Error types raised by the formatter registry and engine."""

from __future__ import annotations

from pathlib import Path


class SpoonError(Exception):
    """Base class for all spoon errors."""


class DuplicateNameError(SpoonError):
    """Raised when a formatter name is registered twice."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Formatter already registered: {name}")


class UnknownFormatterError(SpoonError):
    """Raised when a formatter name is not in the registry."""

    def __init__(self, name: str, available: list[str] | None = None) -> None:
        self.name = name
        self.available = available or []
        message = f"Unknown formatter: {name}"
        if self.available:
            message += f". Available: {', '.join(self.available)}"
        super().__init__(message)


class ConfigurationError(SpoonError):
    """Raised when the registry or the config file is misconfigured."""


class FileWriteError(SpoonError):
    """Raised when a report file cannot be written.

    A report that fails to persist aborts the run.
    """

    def __init__(self, path: Path, cause: Exception | None = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Unable to write report file: {path}"
        if cause:
            message += f" ({cause})"
        super().__init__(message)


class ProtocolViolation(SpoonError):
    """Raised when an event arrives in a state that cannot accept it."""

    def __init__(self, event: str, state: str) -> None:
        self.event = event
        self.state = state
        super().__init__(f"Event '{event}' received in state '{state}'")


class RunnerError(SpoonError):
    """Raised when the test execution engine reports a startup exception."""


__all__ = [
    "ConfigurationError",
    "DuplicateNameError",
    "FileWriteError",
    "ProtocolViolation",
    "RunnerError",
    "SpoonError",
    "UnknownFormatterError",
]
