from typing import Any


class QueryBuilder:
    """Immutable builder for parameterised SELECT statements.

    Every method returns a new builder; placeholders use asyncpg's ``$n`` style.

    Example:
        query, params = (
            QueryBuilder("post")
            .order_by_desc("published_at", nulls_last=True)
            .limit(10)
            .offset(20)
            .build()
        )
    """

    def __init__(self, table_name: str):
        self.table_name = table_name
        self.select_fields: str = "*"
        self.where_conditions: list[str] = []
        self.params: list[Any] = []
        self.order_by_parts: list[str] = []
        self.limit_count: int | None = None
        self.offset_count: int | None = None

    def _clone(self) -> "QueryBuilder":
        new_builder = QueryBuilder(self.table_name)
        new_builder.select_fields = self.select_fields
        new_builder.where_conditions = self.where_conditions.copy()
        new_builder.params = self.params.copy()
        new_builder.order_by_parts = self.order_by_parts.copy()
        new_builder.limit_count = self.limit_count
        new_builder.offset_count = self.offset_count
        return new_builder

    def select(self, *fields: str) -> "QueryBuilder":
        """Set the SELECT list; no fields means ``*``"""
        new_builder = self._clone()
        new_builder.select_fields = ", ".join(str(f) for f in fields) if fields else "*"
        return new_builder

    def where(self, field: str, value: Any) -> "QueryBuilder":
        """Add an AND-ed ``field = value`` condition"""
        new_builder = self._clone()
        new_builder.params.append(value)
        new_builder.where_conditions.append(f"{field} = ${len(new_builder.params)}")
        return new_builder

    def order_by_desc(self, field: str, nulls_last: bool = False) -> "QueryBuilder":
        """Add ORDER BY ... DESC. PostgreSQL sorts NULLs first unless nulls_last is set."""
        new_builder = self._clone()
        suffix = " NULLS LAST" if nulls_last else ""
        new_builder.order_by_parts.append(f"{field} DESC{suffix}")
        return new_builder

    def limit(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError("Limit must be 0 or greater")
        new_builder = self._clone()
        new_builder.limit_count = count
        return new_builder

    def offset(self, count: int) -> "QueryBuilder":
        if count < 0:
            raise ValueError("Offset must be 0 or greater")
        new_builder = self._clone()
        new_builder.offset_count = count
        return new_builder

    def build(self) -> tuple[str, list[Any]]:
        """Build the SQL statement and its parameters"""
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
