"""Structured logging configuration for license-report.

Log events go to stderr so that reports printed to stdout stay clean.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from rich.console import Console
from rich.markup import escape

_LEVEL_STYLES = {
    "debug": "dim",
    "info": "green",
    "warning": "yellow",
    "error": "bold red",
    "critical": "bold magenta",
}


class RichConsoleRenderer:
    """Render structlog events as styled key=value lines on a Rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console if console is not None else Console(stderr=True)

    def __call__(self, logger: Any, name: str, event_dict: dict[str, Any]) -> str:
        event = event_dict.pop("event", "")
        level = event_dict.pop("level", "info")
        logger_name = event_dict.pop("logger", None)
        timestamp = event_dict.pop("timestamp", None)
        exception = event_dict.pop("exception", None)

        parts: list[str] = []
        if timestamp:
            parts.append(f"[dim]{timestamp}[/dim]")
        if logger_name:
            parts.append(f"[bold]{logger_name}[/bold]")
        style = _LEVEL_STYLES.get(level, "white")
        parts.append(f"[{style}]{level:<8}[/{style}]")
        parts.append(escape(str(event)))
        for key, value in event_dict.items():
            parts.append(f"[cyan]{key}[/cyan]=[green]{escape(repr(value))}[/green]")

        message = " ".join(parts)
        if exception:
            message += f"\n[red]{escape(str(exception))}[/red]"

        self._console.print(message, highlight=False)
        # Already printed; stop the stdlib handler from printing it again
        raise structlog.DropEvent


def setup_logging(
    level: str = "WARNING",
    json_output: bool = False,
    console: Console | None = None,
) -> None:
    """Configure structlog for the process.

    Args:
        level: Minimum log level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Emit one JSON object per event instead of console lines.
        console: Optional Rich console for the console renderer.
    """
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())
    logging.getLogger().setLevel(level.upper())

    shared_processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [RichConsoleRenderer(console)]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
