"""
Shared CLI utilities for gtclust.

Provides console output helpers and logging setup.
"""

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)


@contextmanager
def spinner_progress(
    description: str,
    console: Console | None = None,
    quiet: bool = False,
) -> Generator[Progress, None, None]:
    """Context manager for spinner-style progress display.

    The spinner is suppressed when quiet mode is enabled.

    Args:
        description: Task description to display.
        console: Rich Console instance.
        quiet: If True, suppress the progress display entirely.

    Yields:
        Progress instance (even when quiet, for API consistency).
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
        disable=quiet,
    ) as progress:
        progress.add_task(description=description, total=None)
        yield progress


def setup_logging(
    console: Console,
    verbose: bool = False,
    quiet: bool = False,
) -> logging.Logger:
    """Route gtclust log records through a Rich handler.

    Level is DEBUG when verbose, ERROR when quiet, WARNING otherwise.
    Calling this again replaces the previously installed handler.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger("gtclust")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console, show_path=verbose, markup=False)
    handler.setLevel(level)
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


class QuietConsole:
    """Console wrapper that suppresses output in quiet mode.

    Wraps a Rich Console instance and conditionally suppresses print
    output when quiet mode is enabled. Output that must always be shown
    goes through the wrapped console.

    Example:
        >>> console = Console()
        >>> qc = QuietConsole(console, quiet=True)
        >>> qc.print("This won't be shown")  # Suppressed
    """

    def __init__(self, console: Console, quiet: bool = False):
        self._console = console
        self._quiet = quiet

    @property
    def console(self) -> Console:
        """The wrapped Console, for output that ignores quiet mode."""
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console unless quiet mode is enabled."""
        if not self._quiet:
            self._console.print(*args, **kwargs)
