"""CLI module for the spoon report engine."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from spoon.config import SpoonConfig, get_config
from spoon.errors import ConfigurationError, RunnerError, SpoonError, UnknownFormatterError
from spoon.events import EventStream
from spoon.registry import build_formatters, get_formatter_registry
from spoon.version import __version__


def main() -> None:
    """Entry point for the spoon CLI."""
    try:
        config = get_config()
    except ConfigurationError as exc:
        Console(stderr=True).print(f"[red]{escape(str(exc))}[/red]")
        raise SystemExit(2) from exc

    parser = _build_parser()
    argv = [*config.addopts, *sys.argv[1:]] if config.addopts else sys.argv[1:]
    args = parser.parse_args(argv)
    _configure_logging(getattr(args, "verbose", 0))

    if args.command == "formatters":
        raise SystemExit(_list_formatters(Console()))

    if args.command == "report":
        raise SystemExit(_run_report(args, config))

    parser.print_help()
    raise SystemExit(0)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="spoon", description="Spoon test report engine")
    parser.add_argument("--version", action="version", version=f"spoon {__version__}")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("formatters", help="List available formatters")

    report_parser = subparsers.add_parser("report", help="Render a recorded event stream")
    report_parser.add_argument(
        "events",
        nargs="?",
        default="-",
        help="File with one event per line (default: stdin)",
    )
    report_parser.add_argument(
        "-f",
        "--format",
        dest="formatters",
        action="append",
        help="Formatter to use, optionally with an output file: junit>junit.xml",
    )
    report_parser.add_argument("-s", "--suite", dest="suite_name", help="Suite name")
    report_parser.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable colored console output",
    )
    report_parser.add_argument(
        "--suppress-log",
        action="store_true",
        default=None,
        help="Do not render console output from specs",
    )
    report_parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log output"
    )
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.DEBUG if verbosity > 0 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _list_formatters(console: Console) -> int:
    """Print the formatter catalog."""
    table = Table(title="Formatters")
    table.add_column("Name", style="bold")
    table.add_column("Description")
    table.add_column("Default", justify="center")

    for descriptor in get_formatter_registry().list():
        table.add_row(
            descriptor.name,
            descriptor.description,
            "[green]yes[/green]" if descriptor.default else "",
        )

    console.print(table)
    return 0


@contextmanager
def _open_events(path: str) -> Iterator[TextIO]:
    if path == "-":
        yield sys.stdin
        return
    with Path(path).open(encoding="utf-8") as f:
        yield f


def _run_report(args: argparse.Namespace, config: SpoonConfig) -> int:
    """Replay an event stream through the selected formatters."""
    console = Console(stderr=True)
    selection = args.formatters or config.formatters
    suite_name = args.suite_name or config.suite_name
    color = config.color if args.color is None else args.color
    suppress_log = config.suppress_log if args.suppress_log is None else args.suppress_log

    try:
        formatter = build_formatters(selection, suite_name=suite_name, color=color)
    except (UnknownFormatterError, ConfigurationError) as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 2
    except SpoonError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    stream = EventStream(formatter, suppress_log=suppress_log)
    try:
        with _open_events(args.events) as lines:
            failure_count = stream.process_lines(lines)
    except FileNotFoundError:
        console.print(f"[red]Event file not found: {escape(args.events)}[/red]")
        return 2
    except (OSError, UnicodeDecodeError) as exc:
        message = f"Cannot read event file {args.events}: {exc}"
        console.print(f"[red]{escape(message)}[/red]")
        return 2
    except RunnerError as exc:
        console.print(f"[red]Runner failed to start: {escape(str(exc))}[/red]")
        return 1
    except SpoonError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    return 1 if failure_count else 0


__all__ = ["main"]
