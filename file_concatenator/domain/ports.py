"""
Collaborators the pipeline talks to but does not implement.
"""

from typing import Protocol


class LinePrompt(Protocol):
    """Shows a prompt and returns one line of user input, possibly empty."""

    def __call__(self, text: str) -> str: ...


class MessageSink(Protocol):
    """Receives human-readable status messages."""

    def info(self, message: str) -> None: ...

    def success(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...
