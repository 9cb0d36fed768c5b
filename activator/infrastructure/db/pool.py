"""Process-wide Postgres pool backing PgUserStore."""
from __future__ import annotations

from typing import Optional

from psycopg.conninfo import conninfo_to_dict, make_conninfo
from psycopg_pool import AsyncConnectionPool

from activator.settings import Settings, get_settings

_pool: Optional[AsyncConnectionPool] = None


def _conninfo(settings: Settings) -> str:
    params = conninfo_to_dict(settings.database_url)
    params.setdefault("connect_timeout", settings.db_connect_timeout)
    params.setdefault("application_name", "activator")
    return make_conninfo(**params)


def get_pool(settings: Optional[Settings] = None) -> AsyncConnectionPool:
    """
    Build the pool on first use, closed. The lifespan opens it.
    """
    global _pool
    if _pool is None:
        settings = settings or get_settings()
        _pool = AsyncConnectionPool(
            _conninfo(settings),
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            timeout=settings.db_pool_timeout,
            name="activator-users",
            open=False,
        )
    return _pool


async def open_pool(
    settings: Optional[Settings] = None, *, wait: bool = False
) -> AsyncConnectionPool:
    pool = get_pool(settings)
    if pool.closed:
        await pool.open(wait=wait)
    return pool


async def close_pool() -> None:
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
