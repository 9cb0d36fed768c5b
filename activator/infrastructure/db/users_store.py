from __future__ import annotations

from typing import Any, Optional

from psycopg import sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool

from activator.domain.errors import BadRequest, NotFound
from activator.domain.ports.user_store import UserRecord, UserStorePort


class PgUserStore(UserStorePort):
    """
    Postgres implementation of UserStorePort over an existing users table.

    NOTE:
    - Column names come straight from the query/patch keys, so they are
      always quoted as identifiers and never interpolated as text.
    - Each call borrows its own connection; the pool commits on exit.
    """

    def __init__(
        self,
        pool: AsyncConnectionPool,
        *,
        table: str = "users",
        id_column: str = "id",
    ) -> None:
        self._pool = pool
        self._table = sql.Identifier(table)
        self._id_column = id_column

    def _assignments(
        self, fields: dict[str, Any], joiner: str, *, as_text: bool = False
    ) -> sql.Composed:
        # lookups compare as text; one identity is tried on id columns of any type
        template = sql.SQL("{}::text = {}" if as_text else "{} = {}")
        return sql.SQL(joiner).join(
            template.format(sql.Identifier(name), sql.Placeholder())
            for name in fields
        )

    async def find(self, query: dict[str, Any]) -> Optional[UserRecord]:
        if not query:
            raise BadRequest("empty user query")
        stmt = sql.SQL("SELECT * FROM {table} WHERE {where} LIMIT 1").format(
            table=self._table,
            where=self._assignments(query, " AND ", as_text=True),
        )
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(stmt, [str(v) for v in query.values()])
                row = await cur.fetchone()
        return dict(row) if row else None

    async def save(self, user_id: Any, patch: dict[str, Any]) -> UserRecord:
        if not patch:
            raise BadRequest("empty user patch")
        stmt = sql.SQL(
            "UPDATE {table} SET {assignments} WHERE {id_column} = %s RETURNING *"
        ).format(
            table=self._table,
            assignments=self._assignments(patch, ", "),
            id_column=sql.Identifier(self._id_column),
        )
        params = [*patch.values(), str(user_id)]
        async with self._pool.connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(stmt, params)
                row = await cur.fetchone()
        if not row:
            raise NotFound()
        return dict(row)
