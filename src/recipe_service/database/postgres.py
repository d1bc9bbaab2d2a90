"""PostgreSQL entity store.

Each collection is a table holding the document body in a JSONB column::

    id          TEXT PRIMARY KEY
    seq         BIGSERIAL        -- insertion order, used to break sort ties
    data        JSONB NOT NULL   -- every field except id and timestamps
    created_at  TIMESTAMPTZ
    updated_at  TIMESTAMPTZ

Unique indexes from ``UNIQUE_KEYS`` are created as expression indexes over
``data``, so the database rejects a second review by the same reviewer on
the same recipe even when two requests race past the service-level check.
"""

from __future__ import annotations

import contextlib
import uuid
from typing import TYPE_CHECKING, Any

import asyncpg
import orjson

from recipe_service.database.exceptions import (
    DocumentNotFoundError,
    DuplicateDocumentError,
    StoreConnectionError,
    StoreError,
)
from recipe_service.database.store import (
    COLLECTIONS,
    UNIQUE_KEYS,
    check_collection,
    strip_reserved,
)
from recipe_service.observability.logging import get_logger


if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Mapping

    from asyncpg import Connection, Pool, Record

    from recipe_service.database.store import Document, Filter, Sort

logger = get_logger(__name__)

# Document fields that live in dedicated columns rather than in ``data``.
_COLUMN_FIELDS = {
    "id": "id",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def _dumps(value: Any) -> str:
    return orjson.dumps(value).decode()


async def _init_connection(conn: Connection) -> None:
    """Register JSONB codecs so ``data`` round-trips as dicts."""
    await conn.set_type_codec(
        "jsonb",
        encoder=_dumps,
        decoder=orjson.loads,
        schema="pg_catalog",
    )


def _row_to_document(row: Record) -> Document:
    return {
        **row["data"],
        "id": row["id"],
        "createdAt": row["created_at"],
        "updatedAt": row["updated_at"],
    }


class _QueryBuilder:
    """Accumulates positional parameters while rendering a WHERE clause."""

    def __init__(self) -> None:
        self.params: list[Any] = []

    def _param(self, value: Any, cast: str = "") -> str:
        self.params.append(value)
        return f"${len(self.params)}{cast}"

    def where(self, filter_: Filter | None) -> str:
        if not filter_:
            return ""

        clauses: list[str] = []
        contains: dict[str, Any] = {}
        for field, expected in filter_.items():
            is_in = isinstance(expected, dict) and "$in" in expected
            column = _COLUMN_FIELDS.get(field)

            if is_in:
                values = [str(v) for v in expected["$in"]]
                target = column or f"data->>{self._param(field)}"
                clauses.append(f"{target} = ANY({self._param(values, '::text[]')})")
            elif column:
                clauses.append(f"{column} = {self._param(expected)}")
            else:
                contains[field] = expected

        if contains:
            clauses.append(f"data @> {self._param(contains, '::jsonb')}")
        return " WHERE " + " AND ".join(clauses)

    def order_by(self, sort: Sort) -> str:
        parts: list[str] = []
        for field, direction in sort:
            target = _COLUMN_FIELDS.get(field) or f"data->{self._param(field)}"
            parts.append(f"{target} {'DESC' if direction < 0 else 'ASC'}")
        parts.append("seq ASC")
        return " ORDER BY " + ", ".join(parts)


class PostgresEntityStore:
    """EntityStore implementation backed by an asyncpg pool."""

    def __init__(
        self,
        dsn: str,
        *,
        schema: str = "recipe_box",
        min_size: int = 2,
        max_size: int = 10,
        command_timeout: float = 30.0,
        ssl: bool = False,
    ) -> None:
        self._dsn = dsn
        self._schema = schema
        self._min_size = min_size
        self._max_size = max_size
        self._command_timeout = command_timeout
        self._ssl = ssl
        self._pool: Pool | None = None

    @property
    def backend_name(self) -> str:
        return "postgres"

    @property
    def pool(self) -> Pool:
        """Get the connection pool."""
        if self._pool is None:
            msg = "Entity store not initialized. Call initialize() first."
            raise StoreConnectionError(msg)
        return self._pool

    def _table(self, collection: str) -> str:
        return f'"{self._schema}"."{check_collection(collection)}"'

    async def initialize(self) -> None:
        """Create the pool and ensure tables and indexes exist."""
        logger.info(
            "Initializing entity store connection pool",
            schema=self._schema,
            min_size=self._min_size,
            max_size=self._max_size,
        )
        try:
            self._pool = await asyncpg.create_pool(
                dsn=self._dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                command_timeout=self._command_timeout,
                ssl=self._ssl or None,
                init=_init_connection,
            )
        except (OSError, asyncpg.PostgresError) as e:
            logger.exception("Failed to connect to database")
            msg = "Could not connect to database"
            raise StoreConnectionError(msg) from e

        await self._create_schema()
        logger.info("Entity store ready", backend=self.backend_name)

    async def _create_schema(self) -> None:
        statements = [f'CREATE SCHEMA IF NOT EXISTS "{self._schema}"']
        for collection in COLLECTIONS:
            table = self._table(collection)
            statements.append(
                f"CREATE TABLE IF NOT EXISTS {table} ("
                "id TEXT PRIMARY KEY, "
                "seq BIGSERIAL, "
                "data JSONB NOT NULL, "
                "created_at TIMESTAMPTZ NOT NULL DEFAULT now(), "
                "updated_at TIMESTAMPTZ NOT NULL DEFAULT now())"
            )
            statements.append(
                f'CREATE INDEX IF NOT EXISTS "{collection}_created_idx" '
                f"ON {table} (created_at DESC, seq)"
            )
            fields = UNIQUE_KEYS.get(collection)
            if fields:
                expr = ", ".join(f"(data->>'{f}')" for f in fields)
                statements.append(
                    f'CREATE UNIQUE INDEX IF NOT EXISTS "{collection}_unique_idx" '
                    f"ON {table} ({expr})"
                )

        async with self._connection() as conn:
            for statement in statements:
                await conn.execute(statement)

    async def shutdown(self) -> None:
        logger.info("Closing entity store connection pool")
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
        logger.info("Entity store connection pool closed")

    async def health(self) -> dict[str, str]:
        if self._pool is None:
            return {"database": "not_initialized"}
        try:
            async with self._pool.acquire() as conn:
                await conn.fetchval("SELECT 1")
        except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError):
            return {"database": "unhealthy"}
        return {"database": "healthy"}

    @contextlib.asynccontextmanager
    async def _connection(
        self,
        collection: str | None = None,
    ) -> AsyncIterator[Connection]:
        """Acquire a connection, translating driver errors to store errors."""
        try:
            async with self.pool.acquire() as conn:
                yield conn
        except asyncpg.UniqueViolationError as e:
            fields = UNIQUE_KEYS.get(collection or "", ())
            raise DuplicateDocumentError(collection or "", fields) from e
        except (OSError, asyncpg.InterfaceError, TimeoutError) as e:
            logger.error("Database connection failure", error=str(e))
            raise StoreConnectionError(str(e)) from e
        except asyncpg.PostgresError as e:
            logger.error(
                "Database operation failed",
                collection=collection,
                sqlstate=e.sqlstate,
                error=str(e),
            )
            raise StoreError(str(e)) from e

    async def create(self, collection: str, document: Mapping[str, Any]) -> Document:
        sql = (
            f"INSERT INTO {self._table(collection)} (id, data) "
            "VALUES ($1, $2::jsonb) RETURNING id, data, created_at, updated_at"
        )
        async with self._connection(collection) as conn:
            row = await conn.fetchrow(sql, str(uuid.uuid4()), strip_reserved(document))
        return _row_to_document(row)

    async def find_by_id(self, collection: str, document_id: str) -> Document | None:
        sql = (
            f"SELECT id, data, created_at, updated_at "
            f"FROM {self._table(collection)} WHERE id = $1"
        )
        async with self._connection(collection) as conn:
            row = await conn.fetchrow(sql, document_id)
        return _row_to_document(row) if row is not None else None

    async def find(
        self,
        collection: str,
        filter_: Filter | None = None,
        sort: Sort = (),
    ) -> list[Document]:
        builder = _QueryBuilder()
        sql = (
            f"SELECT id, data, created_at, updated_at FROM {self._table(collection)}"
            f"{builder.where(filter_)}{builder.order_by(sort)}"
        )
        async with self._connection(collection) as conn:
            rows = await conn.fetch(sql, *builder.params)
        return [_row_to_document(row) for row in rows]

    async def update_by_id(
        self,
        collection: str,
        document_id: str,
        partial: Mapping[str, Any],
    ) -> Document:
        sql = (
            f"UPDATE {self._table(collection)} "
            "SET data = data || $2::jsonb, updated_at = now() "
            "WHERE id = $1 RETURNING id, data, created_at, updated_at"
        )
        async with self._connection(collection) as conn:
            row = await conn.fetchrow(sql, document_id, strip_reserved(partial))
        if row is None:
            raise DocumentNotFoundError(collection, document_id)
        return _row_to_document(row)

    async def delete_by_id(self, collection: str, document_id: str) -> Document:
        sql = (
            f"DELETE FROM {self._table(collection)} WHERE id = $1 "
            "RETURNING id, data, created_at, updated_at"
        )
        async with self._connection(collection) as conn:
            row = await conn.fetchrow(sql, document_id)
        if row is None:
            raise DocumentNotFoundError(collection, document_id)
        return _row_to_document(row)

    async def delete_many(self, collection: str, filter_: Filter) -> int:
        builder = _QueryBuilder()
        sql = f"DELETE FROM {self._table(collection)}{builder.where(filter_)}"
        async with self._connection(collection) as conn:
            status = await conn.execute(sql, *builder.params)
        # asyncpg returns the command tag, e.g. "DELETE 3".
        return int(status.rsplit(" ", 1)[-1])
