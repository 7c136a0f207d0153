"""In-memory record stores"""

from collections.abc import Mapping

from loguru import logger
from pydantic import BaseModel

from booking.entities import (
    EntityPatch,
    IdentifiableTimeslot,
    IdentifiableVenue,
    Pagination,
    Timeslot,
    TimeslotUpdate,
    Venue,
    VenueUpdate,
)
from booking.id_generator import IdGenerator
from booking.pagination import paginate


class RecordStore[T: BaseModel, I: BaseModel, U: EntityPatch]:
    """Id-keyed collection of entities.

    The store owns both the mapping and the id generator. Every value handed
    out is a copy, so callers never hold an alias into the mapping.

    Type Parameters:
        T: Entity without identity (what callers create)
        I: Identifiable entity (entity plus store-assigned ``id``)
        U: Patch model type
    """

    def __init__(
        self,
        entity_class: type[T],
        identifiable_class: type[I],
        update_class: type[U],
        records: Mapping[int, I] | None = None,
    ):
        if "id" not in identifiable_class.model_fields:
            raise ValueError("identifiable_class must declare an id field")

        self.entity_class = entity_class
        self.identifiable_class = identifiable_class
        self.update_class = update_class
        self._label = entity_class.__name__.lower()

        # Rebuild the mapping so ids come from the records themselves
        self._records: dict[int, I] = {}
        for record in (records or {}).values():
            self._records[record.id] = record.model_copy(deep=True)  # type: ignore[attr-defined]
        self._id_generator = IdGenerator.from_existing(self._records)

    @property
    def next_id(self) -> int:
        """The id the next ``create`` will assign."""
        return self._id_generator.peek()

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._records

    def create(self, entity: T) -> I:
        """Store a new entity under a freshly allocated id"""
        logger.info(f"Adding new {self._label}: {entity!r}")
        entity_id = self._id_generator.next()
        record = self.identifiable_class(id=entity_id, **entity.model_dump())
        self._records[entity_id] = record
        return record.model_copy(deep=True)

    def get(self, entity_id: int) -> I | None:
        """Return a copy of the record, or None if not found"""
        record = self._records.get(entity_id)
        return record.model_copy(deep=True) if record is not None else None

    def list(self, pagination: Pagination | None = None) -> list[I]:
        """Return records in insertion order, windowed by ``pagination``"""
        return [
            record.model_copy(deep=True)
            for record in paginate(self._records.values(), pagination)
        ]

    def update(self, entity_id: int, patch: U) -> I | None:
        """Apply the fields set in ``patch`` and return the updated record.

        Fields the patch leaves unspecified keep their stored values. Returns
        None if no record has this id.
        """
        record = self._records.get(entity_id)
        if record is None:
            return None

        changes = patch.changes()
        if not changes:
            return record.model_copy(deep=True)

        logger.info(f"Updating {self._label} {entity_id}: {changes!r}")
        updated = self.identifiable_class.model_validate(
            {**record.model_dump(), **changes, "id": entity_id}
        )
        self._records[entity_id] = updated
        return updated.model_copy(deep=True)

    def delete(self, entity_id: int) -> I | None:
        """Remove the record and return it, or None if not found"""
        record = self._records.pop(entity_id, None)
        if record is not None:
            logger.info(f"Removed {self._label} {entity_id}")
        return record

    def to_mapping(self) -> dict[int, I]:
        """Snapshot of the id -> record mapping, e.g. for persistence"""
        return {
            entity_id: record.model_copy(deep=True)
            for entity_id, record in self._records.items()
        }


class VenueStore(RecordStore[Venue, IdentifiableVenue, VenueUpdate]):
    def __init__(self, records: Mapping[int, IdentifiableVenue] | None = None):
        super().__init__(
            entity_class=Venue,
            identifiable_class=IdentifiableVenue,
            update_class=VenueUpdate,
            records=records,
        )

    @classmethod
    def from_mapping(cls, records: Mapping[int, IdentifiableVenue]) -> "VenueStore":
        return cls(records)


class TimeslotStore(RecordStore[Timeslot, IdentifiableTimeslot, TimeslotUpdate]):
    def __init__(self, records: Mapping[int, IdentifiableTimeslot] | None = None):
        super().__init__(
            entity_class=Timeslot,
            identifiable_class=IdentifiableTimeslot,
            update_class=TimeslotUpdate,
            records=records,
        )

    @classmethod
    def from_mapping(
        cls, records: Mapping[int, IdentifiableTimeslot]
    ) -> "TimeslotStore":
        return cls(records)

    def list_for_venue(
        self, venue_id: int, pagination: Pagination | None = None
    ) -> list[IdentifiableTimeslot]:
        """Timeslots belonging to one venue, in insertion order"""
        matching = (r for r in self._records.values() if r.venue_id == venue_id)
        return [record.model_copy(deep=True) for record in paginate(matching, pagination)]
