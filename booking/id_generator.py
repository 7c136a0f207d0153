from collections.abc import Iterable
from threading import Lock


class IdGenerator:
    """Monotonic integer id allocator.

    ``next()`` is an atomic fetch-and-increment, so concurrent writers always
    observe distinct values. The counter never rewinds, ids freed by a delete
    are not handed out again.
    """

    def __init__(self, start: int = 0) -> None:
        if start < 0:
            raise ValueError("IdGenerator start must not be negative")
        self._value = start
        self._lock = Lock()

    @classmethod
    def from_existing(cls, ids: Iterable[int]) -> "IdGenerator":
        """Start one past the largest existing id, or at 0 when there is none."""
        return cls(max(ids, default=-1) + 1)

    def next(self) -> int:
        with self._lock:
            value = self._value
            self._value += 1
            return value

    def peek(self) -> int:
        """Return the id the next call to ``next()`` will hand out."""
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"IdGenerator(next={self._value})"
