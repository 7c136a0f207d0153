"""Row models for the relational store.

Rows carry the bookkeeping columns (timestamps, soft delete marker) on top
of the identifiable entities the rest of the code works with.
"""

from datetime import datetime

from booking.entities import IdentifiableTimeslot, IdentifiableVenue


class VenueRow(IdentifiableVenue):
    created_at: datetime | None = None
    last_modified: datetime | None = None
    deleted_at: datetime | None = None


class TimeslotRow(IdentifiableTimeslot):
    created_at: datetime | None = None
    last_modified: datetime | None = None
    deleted_at: datetime | None = None
