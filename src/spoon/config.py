"""Configuration loaded from ``[tool.spoon]`` in pyproject.toml and the environment."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from spoon.errors import ConfigurationError


@dataclass(frozen=True)
class SpoonConfig:
    """Settings shared by the CLI and the formatters.

    Attributes:
        color: Colorize console output.
        formatters: Formatter selections, e.g. ``["dot", "junit>junit.xml"]``.
        suite_name: Suite name used in reports and rerun commands.
        suppress_log: Do not render console output from specs.
        rerun_command: Command printed in front of failed example filters.
        addopts: Extra CLI arguments prepended to the command line.
    """

    color: bool = True
    formatters: list[str] = field(default_factory=list)
    suite_name: str = "default"
    suppress_log: bool = False
    rerun_command: str = "spoon"
    addopts: list[str] = field(default_factory=list)


DEFAULT_CONFIG = SpoonConfig()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def find_pyproject(start: Path | None = None) -> Path | None:
    """Return the nearest pyproject.toml walking up from ``start``."""
    start_dir = (start or Path.cwd()).resolve()
    for directory in [start_dir, *start_dir.parents]:
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _as_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    msg = f"Invalid boolean for {name}: {value!r}"
    raise ConfigurationError(msg)


def _as_list(name: str, value: Any) -> list[str]:
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    msg = f"Invalid list for {name}: {value!r}"
    raise ConfigurationError(msg)


def _from_table(table: dict[str, Any], base: SpoonConfig) -> SpoonConfig:
    known = {
        "color",
        "formatters",
        "suite_name",
        "suppress_log",
        "rerun_command",
        "addopts",
    }
    unknown = sorted(set(table) - known)
    if unknown:
        msg = f"Unknown [tool.spoon] keys: {', '.join(unknown)}"
        raise ConfigurationError(msg)

    config = base
    if "color" in table:
        config = replace(config, color=_as_bool("color", table["color"]))
    if "formatters" in table:
        config = replace(config, formatters=_as_list("formatters", table["formatters"]))
    if "suite_name" in table:
        config = replace(config, suite_name=str(table["suite_name"]))
    if "suppress_log" in table:
        config = replace(config, suppress_log=_as_bool("suppress_log", table["suppress_log"]))
    if "rerun_command" in table:
        config = replace(config, rerun_command=str(table["rerun_command"]))
    if "addopts" in table:
        addopts = table["addopts"]
        if isinstance(addopts, str):
            addopts = addopts.split()
        config = replace(config, addopts=_as_list("addopts", addopts))
    return config


def _from_env(env: Mapping[str, str], base: SpoonConfig) -> SpoonConfig:
    config = base
    if "SPOON_COLOR" in env:
        config = replace(config, color=_as_bool("SPOON_COLOR", env["SPOON_COLOR"]))
    elif "NO_COLOR" in env:
        config = replace(config, color=False)
    if "SPOON_FORMATTERS" in env:
        config = replace(config, formatters=_as_list("SPOON_FORMATTERS", env["SPOON_FORMATTERS"]))
    if "SPOON_SUITE" in env:
        config = replace(config, suite_name=env["SPOON_SUITE"])
    if "SPOON_SUPPRESS_LOG" in env:
        config = replace(
            config, suppress_log=_as_bool("SPOON_SUPPRESS_LOG", env["SPOON_SUPPRESS_LOG"])
        )
    return config


def load_config(start: Path | None = None) -> SpoonConfig:
    """Build the configuration from pyproject.toml, .env and the environment.

    Environment variables win over the file.
    """
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path)
    config = DEFAULT_CONFIG

    pyproject = find_pyproject(start)
    if pyproject is not None:
        try:
            with pyproject.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid {pyproject}: {exc}"
            raise ConfigurationError(msg) from exc
        table = data.get("tool", {}).get("spoon")
        if table is not None:
            config = _from_table(table, config)

    return _from_env(os.environ, config)


@lru_cache(maxsize=1)
def get_config() -> SpoonConfig:
    """Return the process configuration, loading it on first use."""
    return load_config()


def reset_config() -> None:
    """Forget the cached configuration."""
    get_config.cache_clear()


__all__ = [
    "DEFAULT_CONFIG",
    "SpoonConfig",
    "find_pyproject",
    "get_config",
    "load_config",
    "reset_config",
]
