"""Result type for explicit error handling.

Every fallible operation in zd (a git command, an API call, reading a
version source) returns either ``Ok(value)`` or ``Err(error)``. Only the CLI
layer turns an ``Err`` into a process exit.

Usage:
    match repo.push():
        case Ok(output):
            console.print(output)
        case Err(error):
            console.fail(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def unwrap_or(self, default: T) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result.

    Attributes:
        error: The error value.
    """

    error: E

    def unwrap_or(self, default: T) -> T:
        return default

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
