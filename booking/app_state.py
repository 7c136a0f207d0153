"""Explicitly constructed handles shared by request handlers.

There is no module-level store: build one ``AppState`` at startup and pass
it to whatever serves requests.
"""

from dataclasses import dataclass

import asyncpg
from loguru import logger

from booking.config import Settings
from booking.entities import (
    IdentifiableTimeslot,
    IdentifiableVenue,
    Timeslot,
    TimeslotUpdate,
    Venue,
    VenueUpdate,
)
from booking.errors import StoreError
from booking.logger_config import setup_logging
from booking.persistence import JsonFilePersistence
from booking.record_store import TimeslotStore, VenueStore
from booking.result import Err, Ok, Result
from booking.shared_store import SharedStore, open_shared_store
from booking.sql.db_context import DatabaseManager
from booking.sql.migrations import apply_migrations
from booking.sql.repository import RepositoryConfig
from booking.sql.venue_repository import TimeslotRepository, VenueRepository

type VenueHandle = SharedStore[Venue, IdentifiableVenue, VenueUpdate]
type TimeslotHandle = SharedStore[Timeslot, IdentifiableTimeslot, TimeslotUpdate]


@dataclass
class AppState:
    venues: VenueHandle
    timeslots: TimeslotHandle

    @classmethod
    def in_memory(cls) -> "AppState":
        """Empty stores without persistence"""
        return cls(venues=SharedStore(VenueStore()), timeslots=SharedStore(TimeslotStore()))

    @classmethod
    async def from_settings(cls, settings: Settings) -> Result["AppState", StoreError]:
        """Build the stores, loading persisted data when ``data_dir`` is set"""
        setup_logging(settings.log_level, settings.log_file)

        if settings.data_dir is None:
            logger.info("No data directory configured, stores are in memory only")
            return Ok(cls.in_memory())

        venues = await open_shared_store(
            JsonFilePersistence(settings.data_dir / "venues.json", IdentifiableVenue),
            VenueStore,
        )
        if isinstance(venues, Err):
            return venues

        timeslots = await open_shared_store(
            JsonFilePersistence(settings.data_dir / "timeslots.json", IdentifiableTimeslot),
            TimeslotStore,
        )
        if isinstance(timeslots, Err):
            return timeslots

        return Ok(cls(venues=venues.value, timeslots=timeslots.value))

    async def flush(self) -> Result[None, StoreError]:
        """Persist both stores; stops at the first failure"""
        for store in (self.venues, self.timeslots):
            if store.persistence is None:
                continue
            result = await store.flush()
            if isinstance(result, Err):
                return result
        return Ok(None)


@dataclass
class DatabaseState:
    venues: VenueRepository
    timeslots: TimeslotRepository
    db_name: str

    @classmethod
    async def connect(cls, settings: Settings) -> "DatabaseState":
        """Open the pool, register it and bring the schema up to date"""
        if not settings.database_dsn:
            raise ValueError("database_dsn is not configured")

        pool = await asyncpg.create_pool(
            settings.database_dsn,
            min_size=settings.pool_min_size,
            max_size=settings.pool_max_size,
        )
        await DatabaseManager.add_pool(settings.db_name, pool)
        applied = await apply_migrations(settings.db_name)
        logger.info(f"Connected to database '{settings.db_name}', applied migrations {applied}")

        config = RepositoryConfig(db_schema=settings.db_schema)
        return cls(
            venues=VenueRepository(config),
            timeslots=TimeslotRepository(config),
            db_name=settings.db_name,
        )

    async def close(self) -> None:
        await DatabaseManager.close_pool(self.db_name)
