"""Shared fixtures for unit tests."""

import io

import pytest

from factories import RecordingFormatter
from spoon.config import reset_config
from spoon.registry import reset_formatter_registry


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch, tmp_path):
    """Fresh registry and config, no stray environment or project files."""
    for name in (
        "SPOON_COLOR",
        "SPOON_FORMATTERS",
        "SPOON_SUITE",
        "SPOON_SUPPRESS_LOG",
        "NO_COLOR",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    reset_formatter_registry()
    reset_config()
    yield
    reset_formatter_registry()
    reset_config()


@pytest.fixture
def output() -> io.StringIO:
    """Console stream for formatters under test."""
    return io.StringIO()


@pytest.fixture
def recording_formatter(output) -> RecordingFormatter:
    """Silent-by-default formatter that remembers its hook calls."""
    return RecordingFormatter(stream=output)
