"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from booking.entities import Timeslot, Venue
from booking.record_store import TimeslotStore, VenueStore
from booking.shared_store import SharedStore


def make_venue(n: int = 0, **overrides) -> Venue:
    fields = {
        "title": f"Venue {n}",
        "description": f"Description of venue {n}",
        "address": f"{n} Main Street",
        "published": False,
    }
    fields.update(overrides)
    return Venue(**fields)


def make_timeslot(venue_id: int, hour: int = 9, **overrides) -> Timeslot:
    start = datetime(2024, 5, 1, hour, tzinfo=UTC)
    fields = {
        "venue_id": venue_id,
        "title": f"Slot at {hour}:00",
        "start": start,
        "end": start + timedelta(hours=1),
    }
    fields.update(overrides)
    return Timeslot(**fields)


@pytest.fixture
def venue() -> Venue:
    return make_venue(1, seats=120)


@pytest.fixture
def venue_store() -> VenueStore:
    return VenueStore()


@pytest.fixture
def timeslot_store() -> TimeslotStore:
    return TimeslotStore()


@pytest.fixture
def shared_venues() -> SharedStore:
    return SharedStore(VenueStore())
