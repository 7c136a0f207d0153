"""
Tests for entity models and patch field states.
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from booking.entities import FieldState, Pagination, Timeslot, TimeslotUpdate, VenueUpdate


class TestFieldState:
    """Absent, set and explicitly null patch fields stay distinct."""

    def test_absent_field_is_unspecified(self):
        patch = VenueUpdate.model_validate({"title": "New"})
        assert patch.field_state("address") == FieldState.UNSPECIFIED

    def test_present_field_is_set(self):
        patch = VenueUpdate.model_validate({"title": "New"})
        assert patch.field_state("title") == FieldState.SET

    def test_null_field_is_cleared(self):
        patch = VenueUpdate.model_validate({"seats": None})
        assert patch.field_state("seats") == FieldState.CLEARED

    def test_unknown_field_raises(self):
        with pytest.raises(KeyError):
            VenueUpdate().field_state("nope")

    def test_false_is_set_not_cleared(self):
        patch = VenueUpdate(published=False)
        assert patch.field_state("published") == FieldState.SET
        assert patch.changes() == {"published": False}


class TestChanges:
    def test_empty_patch_has_no_changes(self):
        assert VenueUpdate().changes() == {}
        assert VenueUpdate().is_empty()

    def test_cleared_clearable_field_is_applied(self):
        assert VenueUpdate.model_validate({"seats": None}).changes() == {"seats": None}

    def test_null_on_required_field_is_ignored(self):
        patch = VenueUpdate.model_validate({"title": None, "address": "Elm St"})
        assert patch.field_state("title") == FieldState.CLEARED
        assert patch.changes() == {"address": "Elm St"}

    def test_timeslot_description_is_clearable(self):
        patch = TimeslotUpdate.model_validate({"description": None})
        assert patch.changes() == {"description": None}

    def test_unknown_keys_are_rejected(self):
        with pytest.raises(ValidationError):
            VenueUpdate.model_validate({"colour": "red"})


class TestTimeslot:
    def test_end_must_follow_start(self):
        start = datetime(2024, 5, 1, 10, tzinfo=UTC)
        with pytest.raises(ValidationError):
            Timeslot(venue_id=0, title="Bad", start=start, end=start)

    def test_naive_times_are_taken_as_utc(self):
        slot = Timeslot(
            venue_id=0,
            title="Naive",
            start=datetime(2024, 5, 1, 9),
            end=datetime(2024, 5, 1, 10, tzinfo=UTC),
        )
        assert slot.start == datetime(2024, 5, 1, 9, tzinfo=UTC)
        assert slot.start.tzinfo is UTC

    def test_patch_times_are_normalized(self):
        patch = TimeslotUpdate(end=datetime(2024, 5, 1, 12))
        assert patch.changes() == {"end": datetime(2024, 5, 1, 12, tzinfo=UTC)}


class TestPagination:
    def test_defaults_are_unbounded(self):
        pagination = Pagination()
        assert pagination.offset is None
        assert pagination.limit is None

    def test_negative_values_are_rejected(self):
        with pytest.raises(ValidationError):
            Pagination(offset=-1)
        with pytest.raises(ValidationError):
            Pagination(limit=-5)
