from booking.entities import (
    IdentifiableTimeslot,
    IdentifiableVenue,
    Pagination,
    TimeslotUpdate,
    VenueUpdate,
)
from booking.sql.repository import RepositoryConfig, SqlRepository
from booking.sql.schemas import TimeslotRow, VenueRow


class VenueRepository(SqlRepository[VenueRow, IdentifiableVenue, VenueUpdate]):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(
            entity_schema_class=VenueRow,
            entity_domain_class=IdentifiableVenue,
            update_class=VenueUpdate,
            table_name="venues",
            config=config,
        )

    async def list_published(
        self, pagination: Pagination | None = None
    ) -> list[IdentifiableVenue]:
        query, params = (
            self._query().where("published", True).order_by("id").paginate(pagination).build()
        )
        rows = await self.db_ops.fetch_all(query, params)
        return [
            self.to_domain_entity(row)
            for row in self.entity_mapper.map_rows_to_entities(rows)
        ]


class TimeslotRepository(
    SqlRepository[TimeslotRow, IdentifiableTimeslot, TimeslotUpdate]
):
    def __init__(self, config: RepositoryConfig | None = None):
        super().__init__(
            entity_schema_class=TimeslotRow,
            entity_domain_class=IdentifiableTimeslot,
            update_class=TimeslotUpdate,
            table_name="timeslots",
            config=config,
        )

    async def list_for_venue(
        self, venue_id: int, pagination: Pagination | None = None
    ) -> list[IdentifiableTimeslot]:
        """Live timeslots of one venue, earliest start first"""
        query, params = (
            self._query()
            .where("venue_id", venue_id)
            .order_by("start")
            .order_by("id")
            .paginate(pagination)
            .build()
        )
        rows = await self.db_ops.fetch_all(query, params)
        return [
            self.to_domain_entity(row)
            for row in self.entity_mapper.map_rows_to_entities(rows)
        ]
