"""Error presentation utilities.

One `error:` line per failure, optionally followed by a dimmed hint.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from selective_pull.core.errors import ErrorCode
from selective_pull.output.console import Style
from selective_pull.services.selector.errors import SelectorError

if TYPE_CHECKING:
    from selective_pull.output.console import ConsoleProtocol

__all__ = ["print_selector_error", "selector_error_exit_code"]


def print_selector_error(error: SelectorError, console: ConsoleProtocol) -> None:
    match error:
        case SelectorError(kind="internal", message=message):
            console.error(f"internal error: {message}")
        case SelectorError(message=message):
            console.error(message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def selector_error_exit_code(error: SelectorError) -> int:
    """Exit code for a selector error.

    The packaging pipeline only checks for non-zero, so every kind maps to
    the same code.
    """
    del error
    return int(ErrorCode.FATAL)
