"""Result type for explicit error handling.

Services return ``Ok(value)`` or ``Err(error)`` instead of raising for
expected failures (a tool exits non-zero, a file is missing). Callers
branch with ``isinstance`` or structural pattern matching:

    match packager.package():
        case Ok(archive):
            console.success(str(archive))
        case Err(error):
            print_package_error(error, console)
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
