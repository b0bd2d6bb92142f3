"""
Console collaborators for the CLI: message sink and line prompt.
Colour is decided once at start-up and carried in PresentationConfig.
"""

import sys
from dataclasses import dataclass
from typing import Optional

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class PresentationConfig:
    """How messages are rendered."""

    color: bool = True

    @classmethod
    def detect(cls, no_color: bool = False, settings_color: bool = True, stream=None) -> "PresentationConfig":
        """Colour only on a terminal, and only when nothing turned it off."""
        stream = stream or sys.stdout
        is_tty = hasattr(stream, "isatty") and stream.isatty()
        return cls(color=is_tty and settings_color and not no_color)

    def make_console(self, stderr: bool = False) -> Console:
        return Console(
            stderr=stderr,
            no_color=not self.color,
            highlight=False,
            soft_wrap=True,
        )


class ConsoleMessageSink:
    """Message sink writing styled lines through rich."""

    STYLES = {
        "info": "cyan",
        "success": "green",
        "warning": "yellow",
        "error": "red",
    }

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console()
        self.error_console = error_console or self.console

    def _emit(self, console: Console, kind: str, message: str) -> None:
        style = self.STYLES[kind]
        console.print(f"[{style}]{escape(message)}[/{style}]")

    def info(self, message: str) -> None:
        self._emit(self.console, "info", message)

    def success(self, message: str) -> None:
        self._emit(self.console, "success", message)

    def warning(self, message: str) -> None:
        self._emit(self.error_console, "warning", f"Warning: {message}")

    def error(self, message: str) -> None:
        self._emit(self.error_console, "error", f"Error: {message}")


class ConsoleLinePrompt:
    """Line prompt reading from the terminal; end of input reads as empty."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def __call__(self, text: str) -> str:
        try:
            return self.console.input(escape(text))
        except EOFError:
            return ""
