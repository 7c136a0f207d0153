"""Venue and timeslot record stores"""

from booking.app_state import AppState, DatabaseState
from booking.config import Settings
from booking.entities import (
    FieldState,
    IdentifiableTimeslot,
    IdentifiableVenue,
    Pagination,
    Timeslot,
    TimeslotUpdate,
    Venue,
    VenueUpdate,
)
from booking.errors import FileAccessError, SerializationError, StoreError
from booking.id_generator import IdGenerator
from booking.persistence import JsonFilePersistence
from booking.record_store import RecordStore, TimeslotStore, VenueStore
from booking.result import Err, Ok
from booking.shared_store import SharedStore, open_shared_store

__all__ = [
    "AppState",
    "DatabaseState",
    "Err",
    "FieldState",
    "FileAccessError",
    "IdGenerator",
    "IdentifiableTimeslot",
    "IdentifiableVenue",
    "JsonFilePersistence",
    "Ok",
    "Pagination",
    "RecordStore",
    "SerializationError",
    "Settings",
    "SharedStore",
    "StoreError",
    "Timeslot",
    "TimeslotStore",
    "TimeslotUpdate",
    "Venue",
    "VenueStore",
    "VenueUpdate",
    "open_shared_store",
]
