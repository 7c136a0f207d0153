"""PostgreSQL-backed variant of the venue and timeslot stores"""

from booking.sql.db_context import DatabaseManager, QueryTracker, transactional
from booking.sql.migrations import apply_migrations
from booking.sql.query_builder import QueryBuilder
from booking.sql.repository import RepositoryConfig, SqlRepository
from booking.sql.venue_repository import TimeslotRepository, VenueRepository

__all__ = [
    "DatabaseManager",
    "QueryBuilder",
    "QueryTracker",
    "RepositoryConfig",
    "SqlRepository",
    "TimeslotRepository",
    "VenueRepository",
    "apply_migrations",
    "transactional",
]
