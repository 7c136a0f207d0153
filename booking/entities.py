from datetime import UTC, datetime
from enum import Enum
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def as_utc(value: datetime | None) -> datetime | None:
    """Naive datetimes are taken to be UTC; aware ones are converted to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Venue(BaseModel):
    """A single venue."""

    title: str
    description: str
    address: str
    published: bool
    seats: int | None = None


class Timeslot(BaseModel):
    """A bookable slot at a venue."""

    venue_id: int
    title: str
    start: datetime
    end: datetime
    description: str | None = None
    published: bool = False

    @field_validator("start", "end")
    @classmethod
    def normalize_times(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)

    @model_validator(mode="after")
    def check_range(self) -> Self:
        if self.end <= self.start:
            raise ValueError("Timeslot end must be after its start")
        return self


class IdentifiableVenue(Venue):
    """A venue with its store-assigned id"""

    id: int


class IdentifiableTimeslot(Timeslot):
    """A timeslot with its store-assigned id"""

    id: int


class FieldState(str, Enum):
    UNSPECIFIED = "UNSPECIFIED"
    SET = "SET"
    CLEARED = "CLEARED"


class EntityPatch(BaseModel):
    """Base class for partial updates.

    A field left out of the input is UNSPECIFIED and leaves the stored value
    alone. A field given as null is CLEARED; it only takes effect for fields
    listed in ``clearable_fields``, everything else treats null as no change.

    Usage:
        patch = VenueUpdate.model_validate({"title": "New", "seats": None})
        patch.field_state("title")    # FieldState.SET
        patch.field_state("seats")    # FieldState.CLEARED
        patch.field_state("address")  # FieldState.UNSPECIFIED
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
    clearable_fields: ClassVar[frozenset[str]] = frozenset()

    def field_state(self, name: str) -> FieldState:
        if name not in type(self).model_fields:
            raise KeyError(name)
        if name not in self.model_fields_set:
            return FieldState.UNSPECIFIED
        if getattr(self, name) is None:
            return FieldState.CLEARED
        return FieldState.SET

    def changes(self) -> dict[str, Any]:
        """Return the field values this patch applies."""
        result = {}
        for name, value in self.model_dump(exclude_unset=True).items():
            if value is None and name not in self.clearable_fields:
                continue
            result[name] = value
        return result

    def is_empty(self) -> bool:
        return not self.changes()


class VenueUpdate(EntityPatch):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"seats"})

    title: str | None = None
    description: str | None = None
    address: str | None = None
    published: bool | None = None
    seats: int | None = None


class TimeslotUpdate(EntityPatch):
    clearable_fields: ClassVar[frozenset[str]] = frozenset({"description"})

    venue_id: int | None = None
    title: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    description: str | None = None
    published: bool | None = None

    @field_validator("start", "end")
    @classmethod
    def normalize_times(cls, value: datetime | None) -> datetime | None:
        return as_utc(value)


class Pagination(BaseModel):
    """Offset/limit window for listings. Both bounds are optional."""

    offset: int | None = Field(default=None, ge=0)
    limit: int | None = Field(default=None, ge=0)
