from __future__ import annotations

from typing import Optional

from redis.asyncio import Redis

from activator.settings import Settings, get_settings

_client: Optional[Redis] = None


def create_redis(url: str, *, socket_timeout: float | None = None) -> Redis:
    # str in, str out: throttle markers are plain text
    return Redis.from_url(
        url,
        encoding="utf-8",
        decode_responses=True,
        socket_timeout=socket_timeout,
        socket_connect_timeout=socket_timeout,
    )


def get_redis(settings: Optional[Settings] = None) -> Redis:
    global _client
    if _client is None:
        settings = settings or get_settings()
        _client = create_redis(
            settings.redis_url, socket_timeout=settings.redis_socket_timeout
        )
    return _client


async def close_redis() -> None:
    global _client
    client, _client = _client, None
    if client is not None:
        await client.aclose()
