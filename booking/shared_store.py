"""Shared-access wrapper around a record store.

One ``SharedStore`` is built at startup and passed explicitly to whatever
handles requests. Reads share the lock, writes hold it exclusively, and no
call takes the lock twice.
"""

from collections.abc import Callable, Mapping

from loguru import logger
from pydantic import BaseModel

from booking.entities import EntityPatch, Pagination
from booking.errors import StoreError
from booking.interfaces import EntityStore
from booking.persistence import JsonFilePersistence
from booking.record_store import RecordStore
from booking.result import Err, Ok, Result
from booking.rwlock import AsyncRWLock


class SharedStore[T: BaseModel, I: BaseModel, U: EntityPatch](EntityStore[I, U]):
    """A record store guarded by a reader/writer lock.

    The critical sections only call into the synchronous record store, so a
    task cancelled while waiting for the lock never leaves the store half
    updated.
    """

    def __init__(
        self,
        store: RecordStore[T, I, U],
        persistence: JsonFilePersistence[I] | None = None,
    ):
        self._store = store
        self._lock = AsyncRWLock()
        self.persistence = persistence

    @property
    def lock(self) -> AsyncRWLock:
        return self._lock

    async def create(self, entity: T) -> I:
        async with self._lock.write():
            return self._store.create(entity)

    async def get(self, entity_id: int) -> I | None:
        async with self._lock.read():
            return self._store.get(entity_id)

    async def list(self, pagination: Pagination | None = None) -> list[I]:
        async with self._lock.read():
            return self._store.list(pagination)

    async def update(self, entity_id: int, patch: U) -> I | None:
        async with self._lock.write():
            return self._store.update(entity_id, patch)

    async def delete(self, entity_id: int) -> I | None:
        async with self._lock.write():
            return self._store.delete(entity_id)

    async def next_id(self) -> int:
        async with self._lock.read():
            return self._store.next_id

    async def count(self) -> int:
        async with self._lock.read():
            return len(self._store)

    async def flush(self) -> Result[None, StoreError]:
        """Save a snapshot of the store through the configured persistence."""
        if self.persistence is None:
            raise ValueError("SharedStore has no persistence configured")

        async with self._lock.read():
            snapshot = self._store.to_mapping()
        return self.persistence.save(snapshot)


async def open_shared_store[S: RecordStore](
    persistence: JsonFilePersistence,
    store_factory: Callable[[Mapping], S],
) -> Result[SharedStore, StoreError]:
    """Load persisted records and wrap them in a ``SharedStore``.

    Usage:
        result = await open_shared_store(
            JsonFilePersistence("data/venues.json", IdentifiableVenue), VenueStore
        )
        if result.is_ok():
            venues = result.value
    """
    loaded = persistence.load()
    if isinstance(loaded, Err):
        return loaded

    store = store_factory(loaded.value)
    logger.info(
        f"Opened {type(store).__name__} with {len(store)} records, next id {store.next_id}"
    )
    return Ok(SharedStore(store, persistence))
