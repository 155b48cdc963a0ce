"""Rich console output and logging setup for note-indexer."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.theme import Theme

# Level for the package logger, set by cli.py from --verbose/--debug
_log_level: int = logging.WARNING

THEME = Theme(
    {
        "info": "cyan",
        "warning": "yellow",
        "error": "bold red",
        "success": "bold green",
        "hint": "dim cyan",
        "query": "magenta",
        "note.title": "bold",
        "note.id": "dim",
        "note.date": "green",
    }
)

# Results go to stdout, messages and log records to stderr
console = Console(theme=THEME)
error_console = Console(theme=THEME, stderr=True)


def set_verbosity(*, verbose: bool = False, debug: bool = False) -> None:
    """Pick the log level: DEBUG with debug, INFO with verbose, else WARNING."""
    global _log_level
    if debug:
        _log_level = logging.DEBUG
    elif verbose:
        _log_level = logging.INFO
    else:
        _log_level = logging.WARNING


def set_color(enabled: bool) -> None:
    console.no_color = not enabled
    error_console.no_color = not enabled


def setup_logging() -> None:
    """Send ``note_indexer.*`` log records to stderr through rich.

    Safe to call repeatedly; an earlier RichHandler is replaced.
    """
    logger = logging.getLogger("note_indexer")
    logger.setLevel(_log_level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.addHandler(RichHandler(console=error_console, show_path=False, markup=False))


def info(message: str) -> None:
    console.print(f"[info]{escape(message)}[/info]")


def success(message: str) -> None:
    console.print(f"[success]{escape(message)}[/success]")


def warning(message: str) -> None:
    """Print a warning to stderr."""
    error_console.print(f"[warning]Warning:[/warning] {escape(message)}")


def error(message: str, hint: str | None = None) -> None:
    """Print an error to stderr, optionally followed by a hint line.

    Args:
        message: What went wrong.
        hint: How the user can fix it.
    """
    error_console.print(f"[error]Error:[/error] {escape(message)}")
    if hint:
        error_console.print(f"  [hint]Hint: {escape(hint)}[/hint]")
