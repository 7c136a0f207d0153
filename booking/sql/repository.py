"""Relational repository"""

from datetime import UTC, datetime
from typing import Any

from loguru import logger
from pydantic import BaseModel, Field

from booking.entities import EntityPatch, Pagination
from booking.interfaces import EntityStore
from booking.sql.database_operations import DatabaseOperations
from booking.sql.entity_mapper import EntityMapper
from booking.sql.query_builder import QueryBuilder

# Columns managed by the repository itself, never taken from callers
_BOOKKEEPING_COLUMNS = frozenset({"id", "created_at", "last_modified", "deleted_at"})


class RepositoryConfig(BaseModel):
    """Configuration options for Repository"""

    db_schema: str | None = Field(default=None, description="Database schema name")


def _quote(column: str) -> str:
    return f'"{column}"'


class SqlRepository[T_schema: BaseModel, I: BaseModel, U: EntityPatch](
    EntityStore[I, U]
):
    """PostgreSQL-backed store with soft delete.

    Separates the stored row (T_schema, with timestamps and ``deleted_at``)
    from the identifiable entity handed to callers (I). Rows with
    ``deleted_at`` set are hidden from ``get`` and ``list`` unless
    ``with_deleted=True`` is passed. Every method must run inside
    ``DatabaseManager.transaction()``.

    Type Parameters:
        T_schema: Row model (identifiable entity plus bookkeeping columns)
        I: Identifiable entity
        U: Patch model type
    """

    def __init__(
        self,
        entity_schema_class: type[T_schema],
        entity_domain_class: type[I],
        update_class: type[U],
        table_name: str,
        config: RepositoryConfig | None = None,
    ):
        if not table_name:
            raise ValueError("table_name is required")
        if "deleted_at" not in entity_schema_class.model_fields:
            raise ValueError("entity_schema_class must declare a deleted_at field")

        self.entity_schema_class = entity_schema_class
        self.entity_domain_class = entity_domain_class
        self.update_class = update_class
        self.table_name = table_name
        self.config = config or RepositoryConfig()
        self._qualified_table_name = (
            f"{self.config.db_schema}.{table_name}"
            if self.config.db_schema
            else table_name
        )
        self._columns = set(entity_schema_class.model_fields)

        self.db_ops = DatabaseOperations()
        self.entity_mapper = EntityMapper(entity_schema_class)

    def to_domain_entity(self, row: T_schema) -> I:
        """Convert a stored row to the entity callers see.

        Override in subclasses to customize mapping from storage to domain.
        """
        return self.entity_domain_class.model_validate(row.model_dump())

    def _query(self, with_deleted: bool = False) -> QueryBuilder:
        builder = QueryBuilder(self._qualified_table_name)
        if not with_deleted:
            builder = builder.where("deleted_at", None)
        return builder

    async def _fetch_returning(self, sql: str, params: list[Any]) -> T_schema | None:
        row = await self.db_ops.fetch_one(sql, params)
        return self.entity_mapper.map_row_to_entity(row) if row else None

    async def create(self, entity: BaseModel) -> I:
        """Insert a new row; the database assigns the id"""
        now = datetime.now(UTC)
        fields = {
            k: v
            for k, v in entity.model_dump().items()
            if k in self._columns and k not in _BOOKKEEPING_COLUMNS
        }
        fields["created_at"] = now
        fields["last_modified"] = now

        columns = ", ".join(_quote(k) for k in fields)
        placeholders = ", ".join(f"${i + 1}" for i in range(len(fields)))
        row = await self._fetch_returning(
            f"INSERT INTO {self._qualified_table_name} ({columns}) "
            f"VALUES ({placeholders}) RETURNING *",
            list(fields.values()),
        )
        if row is None:
            raise RuntimeError(f"INSERT into {self.table_name} returned no row")
        logger.info(f"Created {self.table_name} row {row.id}")  # type: ignore[attr-defined]
        return self.to_domain_entity(row)

    async def get_row(self, entity_id: int, *, with_deleted: bool = True) -> T_schema | None:
        """Return the stored row including bookkeeping columns"""
        query, params = self._query(with_deleted).where("id", entity_id).build()
        return await self._fetch_returning(query, params)

    async def get(self, entity_id: int, *, with_deleted: bool = False) -> I | None:
        row = await self.get_row(entity_id, with_deleted=with_deleted)
        return self.to_domain_entity(row) if row else None

    async def list(
        self, pagination: Pagination | None = None, *, with_deleted: bool = False
    ) -> list[I]:
        """Rows ordered by id, windowed by ``pagination``"""
        query, params = (
            self._query(with_deleted).order_by("id").paginate(pagination).build()
        )
        rows = await self.db_ops.fetch_all(query, params)
        return [
            self.to_domain_entity(row)
            for row in self.entity_mapper.map_rows_to_entities(rows)
        ]

    async def update(self, entity_id: int, patch: U) -> I | None:
        """Apply a patch to a live row.

        Unspecified fields are left alone, cleared fields become NULL. Returns
        None if the row does not exist or is soft-deleted.
        """
        changes = {
            k: v for k, v in patch.changes().items() if k not in _BOOKKEEPING_COLUMNS
        }
        if not changes:
            return await self.get(entity_id)

        changes["last_modified"] = datetime.now(UTC)
        set_clause = ", ".join(
            f"{_quote(k)} = ${i + 2}" for i, k in enumerate(changes)
        )
        row = await self._fetch_returning(
            f"UPDATE {self._qualified_table_name} SET {set_clause} "
            f"WHERE id = $1 AND deleted_at IS NULL RETURNING *",
            [entity_id, *changes.values()],
        )
        return self.to_domain_entity(row) if row else None

    async def delete(self, entity_id: int) -> I | None:
        """Soft delete: mark the row deleted and return its prior value"""
        row = await self._fetch_returning(
            f"UPDATE {self._qualified_table_name} SET deleted_at = $2 "
            f"WHERE id = $1 AND deleted_at IS NULL RETURNING *",
            [entity_id, datetime.now(UTC)],
        )
        if row is None:
            return None
        logger.info(f"Soft deleted {self.table_name} row {entity_id}")
        return self.to_domain_entity(row)

    async def restore(self, entity_id: int) -> I | None:
        """Undo a soft delete. Returns None if the row is not soft-deleted."""
        row = await self._fetch_returning(
            f"UPDATE {self._qualified_table_name} SET deleted_at = NULL "
            f"WHERE id = $1 AND deleted_at IS NOT NULL RETURNING *",
            [entity_id],
        )
        return self.to_domain_entity(row) if row else None

    async def force_delete(self, entity_id: int) -> I | None:
        """Permanently delete a row, bypassing soft delete"""
        row = await self._fetch_returning(
            f"DELETE FROM {self._qualified_table_name} WHERE id = $1 RETURNING *",
            [entity_id],
        )
        return self.to_domain_entity(row) if row else None
