"""Console output abstraction.

Every diagnostic of the scriptlet goes to stderr: stdout belongs to the
tools it drives (snapcraftctl, git) and ends up verbatim in the build log.
Services write through `ConsoleProtocol`, so tests can capture output with
`MockConsole` instead of parsing a terminal.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Protocol

__all__ = [
    "Style",
    "ConsoleProtocol",
    "RichConsole",
    "MockConsole",
]


class Style(Enum):
    """Text styles for console output."""

    DEFAULT = auto()
    ERROR = auto()
    INFO = auto()
    DIM = auto()
    DEBUG = auto()


class ConsoleProtocol(Protocol):
    """Protocol for styled diagnostic output."""

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        """Print a message with optional styling."""
        ...

    def error(self, message: str) -> None: ...

    def info(self, message: str) -> None: ...

    def debug(self, message: str) -> None:
        """Print a trace message; a no-op unless debug output is enabled."""
        ...


class RichConsole:
    """Console implementation using Rich, writing to stderr.

    Lines are never wrapped: a build log is not a terminal, and each
    diagnostic must stay on one line.
    """

    def __init__(self, *, debug: bool = False) -> None:
        # Import Rich lazily to avoid import-time dependency
        from rich.console import Console

        self._console = Console(stderr=True, highlight=False, soft_wrap=True)
        self._debug = debug
        self._style_map = {
            Style.DEFAULT: "",
            Style.ERROR: "red bold",
            Style.INFO: "cyan",
            Style.DIM: "dim",
            Style.DEBUG: "magenta",
        }

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        rich_style = self._style_map.get(style, "")
        if rich_style:
            self._console.print(message, style=rich_style, markup=False)
        else:
            self._console.print(message, markup=False)

    def error(self, message: str) -> None:
        self._console.print(f"[red bold]error:[/red bold] {_escape(message)}")

    def info(self, message: str) -> None:
        self._console.print(f"[cyan]info:[/cyan] {_escape(message)}")

    def debug(self, message: str) -> None:
        if self._debug:
            self._console.print(f"[magenta]debug:[/magenta] {_escape(message)}")


def _escape(message: str) -> str:
    # Tag names and store output may contain brackets.
    from rich.markup import escape

    return escape(message)


@dataclass
class OutputRecord:
    """A single output record for MockConsole."""

    message: str
    style: Style


def _empty_outputs() -> list[OutputRecord]:
    return []


@dataclass
class MockConsole:
    """Console implementation that captures output for testing."""

    outputs: list[OutputRecord] = field(default_factory=_empty_outputs)
    debug_enabled: bool = False

    def print(self, message: str, style: Style = Style.DEFAULT) -> None:
        self.outputs.append(OutputRecord(message, style))

    def error(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"error: {message}", Style.ERROR))

    def info(self, message: str) -> None:
        self.outputs.append(OutputRecord(f"info: {message}", Style.INFO))

    def debug(self, message: str) -> None:
        if self.debug_enabled:
            self.outputs.append(OutputRecord(f"debug: {message}", Style.DEBUG))

    # Test helper methods

    @property
    def messages(self) -> list[str]:
        return [o.message for o in self.outputs]

    def has_error(self) -> bool:
        return any(o.style == Style.ERROR for o in self.outputs)

    def find(self, substring: str) -> list[OutputRecord]:
        return [o for o in self.outputs if substring in o.message]

    def count(self, style: Style) -> int:
        return sum(1 for o in self.outputs if o.style == style)
