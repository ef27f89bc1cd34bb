"""Result type for explicit error handling.

Every external call made while selecting a checkout mode can fail, and a
failure must end the run immediately. Instead of raising, each step returns
`Ok(value)` or `Err(error)` and the caller propagates the first `Err`.

Usage:
    def read_tag(name: str) -> Result[str, str]:
        if not name:
            return Err("empty tag")
        return Ok(name)

    match read_tag("v1.2"):
        case Ok(tag):
            print(f"tag: {tag}")
        case Err(error):
            print(f"error: {error}")
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def map(self, f: Callable[[T], U]) -> Ok[U]:
        """Transform the contained value."""
        return Ok(f(self.value))

    def map_err(self, f: Callable[[E], F]) -> Ok[T]:
        """Return self; there is no error to transform."""
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def map(self, f: Callable[[T], U]) -> Err[E]:
        """Return self; there is no value to transform."""
        return self

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Transform the contained error."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
