"""Result type for explicit error handling.

Every fallible operation in pinbump returns either ``Ok(value)`` or
``Err(error)`` instead of raising. Callers narrow with ``isinstance`` or
``match`` and pass the error on, which keeps a bump run a flat sequence of
stages:

    match resolve_old_identifier(Path("deploy.yaml"), main_branch="master", tag="image"):
        case Ok(pin):
            ...
        case Err(error):
            console.error(error.message)

Adapters convert their own error type at the boundary with ``map_err``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def map_err(self, f: Callable[[object], F]) -> Ok[T]:
        return self

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def map_err(self, f: Callable[[E], F]) -> Err[F]:
        """Replace the error with ``f(error)``."""
        return Err(f(self.error))

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


Result: TypeAlias = Ok[T] | Err[E]
