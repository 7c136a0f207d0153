"""Explicit success/failure values returned across layer boundaries."""

from dataclasses import dataclass
from typing import Never


@dataclass(frozen=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err[E: Exception]:
    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Never:
        """Raise the carried error. Only for callers that cannot handle it."""
        raise self.error


type Result[T, E: Exception] = Ok[T] | Err[E]
