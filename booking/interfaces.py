"""Store interfaces (repository pattern).

Stores must be swappable: the in-memory shared store and the relational
repositories hand out the same identifiable entity shapes.
"""

from abc import ABC, abstractmethod

from booking.entities import Pagination


class EntityStore[I, U](ABC):
    """Interface for create/find/list/update/delete over one resource."""

    @abstractmethod
    async def create(self, entity) -> I:
        """Store a new entity and return it with its assigned id."""
        ...

    @abstractmethod
    async def get(self, entity_id: int) -> I | None:
        """Return an entity by id, or None if not found."""
        ...

    @abstractmethod
    async def list(self, pagination: Pagination | None = None) -> list[I]:
        """Return entities windowed by ``pagination``."""
        ...

    @abstractmethod
    async def update(self, entity_id: int, patch: U) -> I | None:
        """Apply a partial update, or return None if not found."""
        ...

    @abstractmethod
    async def delete(self, entity_id: int) -> I | None:
        """Delete an entity and return its prior value, or None if not found."""
        ...
