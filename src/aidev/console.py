"""Terminal output: the waiting spinner and sandbox log echo."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

console = Console()


class Spinner:
    """A start/stop status indicator shown while waiting on remote calls."""

    def __init__(self, message: str = "Waiting for assistant", out: Console | None = None):
        self._console = out or console
        self._status = self._console.status(f"[bold green]{message}...", spinner="dots")
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if not self._running:
            self._status.start()
            self._running = True

    def stop(self) -> None:
        if self._running:
            self._status.stop()
            self._running = False


def on_log(output: str) -> None:
    """Echo a chunk of sandbox command output."""
    logger.debug("sandbox output %s", output.rstrip())
    console.print(output, style="dim", markup=False, highlight=False, end="")


error_console = Console(stderr=True)


def print_error(message: str) -> None:
    """Print an error line to stderr."""
    error_console.print(f"[bold red]Error:[/bold red] {escape(message)}", highlight=False)
