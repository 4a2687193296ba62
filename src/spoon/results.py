"""Result value objects carried by formatter events.

Payload models are frozen pydantic models so a formatter can keep references
to them for the whole run. :class:`RunSummary` is the one mutable record: it
is the accumulator owned by a single formatter.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class SpecStatus(Enum):
    """Outcome of a single spec."""

    PASSED = "passed"
    PENDING = "pending"
    FAILED = "failed"

    @classmethod
    def _missing_(cls, value: object) -> SpecStatus:
        if value in ("passing", "pass", "success"):
            return cls.PASSED
        if value in ("skipped", "disabled", "excluded"):
            return cls.PENDING
        return cls.FAILED


class _Payload(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class TraceFrame(_Payload):
    """One frame of a JavaScript stack trace."""

    file: str = ""
    line: int | None = None
    function: str | None = None


class RunnerResult(_Payload):
    """Payload of the run start event."""

    total: int = Field(default=0, ge=0)
    start: str | None = None


class SuiteResult(_Payload):
    """Payload of the suite start event.

    Attributes:
        label: Suite description.
        level: Nesting depth, 0 for top level suites.
    """

    label: str
    level: int = Field(default=0, ge=0)


class SpecResult(_Payload):
    """Outcome of one spec.

    Attributes:
        description: Full description including the enclosing suites.
        label: The spec's own description.
        suite: Label of the suite the spec belongs to.
        status: Passed, pending or failed.
        link: Filter string that reruns only this spec.
        message: Failure message.
        location: Source location of the failure.
        trace: Raw stack trace text.
        elapsed: Spec duration in seconds.
    """

    description: str
    label: str = ""
    suite: str = ""
    status: SpecStatus = SpecStatus.PASSED
    link: str = ""
    message: str | None = None
    location: str | None = None
    trace: str | None = None
    elapsed: float | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _coerce_status(cls, value: Any) -> SpecStatus:
        if isinstance(value, SpecStatus):
            return value
        return SpecStatus(value)

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = dict(data)
            description = data.get("description", "")
            if not data.get("label"):
                data["label"] = description
            if not data.get("link"):
                data["link"] = description
        return data

    @property
    def identifier(self) -> str:
        return self.link or self.description

    @property
    def passing(self) -> bool:
        return self.status is SpecStatus.PASSED

    @property
    def pending(self) -> bool:
        return self.status is SpecStatus.PENDING

    @property
    def failing(self) -> bool:
        return self.status is SpecStatus.FAILED


class ErrorResult(_Payload):
    """An error not attributable to any spec.

    Also used as the payload of the exception event, which reports a fatal
    startup failure in the execution engine.
    """

    message: str
    origin: str | None = None
    trace: tuple[TraceFrame, ...] = ()

    @field_validator("trace", mode="before")
    @classmethod
    def _coerce_trace(cls, value: Any) -> Any:
        if value is None:
            return ()
        return value

    @model_validator(mode="before")
    @classmethod
    def _derive_origin(cls, data: Any) -> Any:
        if not isinstance(data, dict) or data.get("origin"):
            return data
        trace = data.get("trace")
        if not isinstance(trace, (list, tuple)) or not trace:
            return data
        frame = trace[0]
        if isinstance(frame, TraceFrame):
            file, line = frame.file, frame.line
        elif isinstance(frame, Mapping):
            file, line = frame.get("file", ""), frame.get("line")
        else:
            return data
        data = dict(data)
        data["origin"] = file if line is None else f"{file}:{line}"
        return data


class RunResult(_Payload):
    """Payload of the final result event."""

    elapsed: float | None = None
    start: str | None = None
    coverage: dict[str, Any] | None = None


@dataclass
class RunSummary:
    """Counters and categorized results for one run."""

    total_count: int = 0
    completed_count: int = 0
    passes: list[SpecResult] = field(default_factory=list)
    pendings: list[SpecResult] = field(default_factory=list)
    failures: list[SpecResult] = field(default_factory=list)
    errors: list[ErrorResult] = field(default_factory=list)

    def record(self, result: SpecResult) -> None:
        """Count a completed spec and file it by status."""
        self.completed_count += 1
        if result.passing:
            self.passes.append(result)
        elif result.pending:
            self.pendings.append(result)
        else:
            self.failures.append(result)

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    @property
    def pending_count(self) -> int:
        return len(self.pendings)

    @property
    def passed(self) -> bool:
        return not self.failures and not self.errors


__all__ = [
    "ErrorResult",
    "RunResult",
    "RunSummary",
    "RunnerResult",
    "SpecResult",
    "SpecStatus",
    "SuiteResult",
    "TraceFrame",
]
