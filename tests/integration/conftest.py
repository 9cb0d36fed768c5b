# tests/integration/conftest.py
import asyncio
import os
import time

import pytest
import pytest_asyncio
from psycopg_pool import AsyncConnectionPool
from redis.asyncio import Redis

DATABASE_URL = os.environ.get("DATABASE_URL")
REDIS_URL = os.environ.get("REDIS_URL")

TABLE = "activator_test_users"
UUID_USER = "8d7f2a52-3a1e-4c55-9a4b-6f1d0c2e7b10"


async def _wait_pool_ready(p: AsyncConnectionPool, timeout: float = 30.0) -> None:
    """Retry simple SELECT until Postgres accepts connections."""
    deadline = time.monotonic() + timeout
    last_exc: Exception | None = None
    while time.monotonic() < deadline:
        try:
            async with p.connection(timeout=1) as conn:
                await conn.execute("SELECT 1;")
            return
        except Exception as e:  # noqa: BLE001
            last_exc = e
            await asyncio.sleep(0.5)
    if last_exc:
        raise last_exc
    raise TimeoutError("database not ready")


@pytest_asyncio.fixture
async def pool():
    if not DATABASE_URL:
        pytest.skip("DATABASE_URL not set")
    p = AsyncConnectionPool(DATABASE_URL, min_size=1, max_size=2, open=False)
    await p.open()
    await _wait_pool_ready(p)
    try:
        yield p
    finally:
        await p.close()


@pytest_asyncio.fixture
async def users_table(pool):
    async with pool.connection() as conn:
        await conn.execute(f"DROP TABLE IF EXISTS {TABLE};")
        await conn.execute(
            f"""
            CREATE TABLE {TABLE} (
                id text PRIMARY KEY,
                email text UNIQUE NOT NULL,
                password text,
                activation_code text,
                password_reset_code text,
                password_reset_time timestamptz
            );
            """
        )
        await conn.execute(
            f"INSERT INTO {TABLE} (id, email, password) VALUES (%s, %s, %s), (%s, %s, %s);",
            ("1", "example@hotmail.com", "1234", "2", "you@x.com", "5678"),
        )
    yield TABLE
    async with pool.connection() as conn:
        await conn.execute(f"DROP TABLE IF EXISTS {TABLE};")


@pytest_asyncio.fixture
async def redis_client():
    if not REDIS_URL:
        pytest.skip("REDIS_URL not set")
    r = Redis.from_url(REDIS_URL, encoding="utf-8", decode_responses=True)
    try:
        yield r
    finally:
        await r.aclose()


@pytest_asyncio.fixture
async def uuid_users_table(pool):
    table = f"{TABLE}_uuid"
    async with pool.connection() as conn:
        await conn.execute(f"DROP TABLE IF EXISTS {table};")
        await conn.execute(
            f"""
            CREATE TABLE {table} (
                id uuid PRIMARY KEY,
                email text UNIQUE NOT NULL,
                password text,
                password_reset_code text,
                password_reset_time timestamptz
            );
            """
        )
        await conn.execute(
            f"INSERT INTO {table} (id, email, password) VALUES (%s, %s, %s);",
            (UUID_USER, "uuid@x.com", "1234"),
        )
    yield table
    async with pool.connection() as conn:
        await conn.execute(f"DROP TABLE IF EXISTS {table};")
