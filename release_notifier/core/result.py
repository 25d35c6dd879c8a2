"""Result type for explicit error handling.

Fallible internal steps (HTTP requests, cache file I/O, config parsing)
return ``Ok(value)`` or ``Err(error)`` instead of raising, so every caller
decides explicitly what a failure means at its own layer.

Usage:
    match source.fetch_all("owner/repo"):
        case Ok(releases):
            print(f"{len(releases)} releases")
        case Err(error):
            print(f"fetch failed: {error.message}")
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result.

    Attributes:
        value: The success value.
    """

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result.

    Attributes:
        error: The error payload.
    """

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
