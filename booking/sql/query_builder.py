"""
Simple QueryBuilder for building SELECT queries.
The goal is to produce SQL queries without execution.
"""

from typing import Any

from booking.entities import Pagination


class QueryBuilder:
    """
    Immutable builder for SELECT statements with ``$n`` placeholders.

    Usage:
        builder = QueryBuilder("venues")
        query, params = builder.where("published", True).order_by("id").build()
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.select_fields = "*"
        self.where_conditions: list[str] = []
        self.params: list[Any] = []
        self.order_by_parts: list[str] = []
        self.limit_count: int | None = None
        self.offset_count: int | None = None

    def _clone(self) -> "QueryBuilder":
        """Create a copy of the current QueryBuilder instance"""
        new_builder = QueryBuilder(self.table_name)
        new_builder.select_fields = self.select_fields
        new_builder.where_conditions = self.where_conditions.copy()
        new_builder.params = self.params.copy()
        new_builder.order_by_parts = self.order_by_parts.copy()
        new_builder.limit_count = self.limit_count
        new_builder.offset_count = self.offset_count
        return new_builder

    def select(self, *fields: str) -> "QueryBuilder":
        """Set the SELECT fields; defaults to * when none are given."""
        new_builder = self._clone()
        new_builder.select_fields = ", ".join(fields) if fields else "*"
        return new_builder

    def where(self, field: str, *args: Any) -> "QueryBuilder":
        """Add a WHERE condition, joined to the others with AND.

        Supports both of the following call styles:
        - where(field, value) -> operator defaults to '='
        - where(field, operator, value) -> explicit operator in the second place

        A None value becomes IS NULL for '=' and IS NOT NULL for '!=' / '<>'.
        """
        if len(args) == 2:
            operator, value = args
        elif len(args) == 1:
            operator, value = "=", args[0]
        else:
            raise TypeError("where() expects (field, value) or (field, operator, value)")

        new_builder = self._clone()
        if value is None and operator == "=":
            condition = f"{field} IS NULL"
        elif value is None and operator in ("!=", "<>"):
            condition = f"{field} IS NOT NULL"
        else:
            new_builder.params.append(value)
            condition = f"{field} {operator} ${len(new_builder.params)}"
        new_builder.where_conditions.append(condition)
        return new_builder

    def order_by(self, field: str) -> "QueryBuilder":
        """Add ORDER BY ascending for a field. Chain to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(field)
        return new_builder

    def order_by_desc(self, field: str) -> "QueryBuilder":
        """Add ORDER BY ... DESC for a field. Chain to add multiple fields."""
        new_builder = self._clone()
        new_builder.order_by_parts.append(f"{field} DESC")
        return new_builder

    def limit(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError("LIMIT must not be negative")
        new_builder = self._clone()
        new_builder.limit_count = count
        return new_builder

    def offset(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError("OFFSET must not be negative")
        new_builder = self._clone()
        new_builder.offset_count = count
        return new_builder

    def paginate(self, pagination: Pagination | None) -> "QueryBuilder":
        """Apply an offset/limit window; unset bounds add no clause."""
        builder = self
        if pagination is None:
            return builder
        if pagination.limit is not None:
            builder = builder.limit(pagination.limit)
        if pagination.offset:
            builder = builder.offset(pagination.offset)
        return builder

    def build(self) -> tuple[str, list[Any]]:
        """Build the final SQL query and parameters"""
        query_parts = [f"SELECT {self.select_fields} FROM {self.table_name}"]

        if self.where_conditions:
            query_parts.append(f"WHERE {' AND '.join(self.where_conditions)}")

        if self.order_by_parts:
            query_parts.append(f"ORDER BY {', '.join(self.order_by_parts)}")

        if self.limit_count is not None:
            query_parts.append(f"LIMIT {self.limit_count}")

        if self.offset_count is not None:
            query_parts.append(f"OFFSET {self.offset_count}")

        return " ".join(query_parts), self.params.copy()

    def to_sql(self) -> str:
        """Return only the SQL query string without parameters"""
        query, _ = self.build()
        return query

    def __str__(self) -> str:
        query, params = self.build()
        return f"Query: {query}\nParams: {params}"
