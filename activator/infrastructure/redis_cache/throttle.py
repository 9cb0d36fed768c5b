from __future__ import annotations

from redis.asyncio import Redis

from activator.domain.errors import RateLimited
from activator.domain.ports.user_store import ThrottlePort, UserRecord


class RedisIssueThrottle(ThrottlePort):
    """
    Allows one issuance per user per window. The first call sets a marker
    key with a TTL; later calls inside the window are denied.
    """

    def __init__(
        self,
        redis: Redis,
        *,
        ttl_seconds: int = 60,
        id_property: str = "id",
        key_prefix: str = "throttle:",
    ) -> None:
        self._redis = redis
        self._ttl = ttl_seconds
        self._id_property = id_property
        self._prefix = key_prefix

    async def throttle(self, record: UserRecord) -> UserRecord:
        key = f"{self._prefix}{record.get(self._id_property)}"
        allowed = await self._redis.set(key, "1", ex=self._ttl, nx=True)
        if not allowed:
            raise RateLimited(f"Try again in {self._ttl} seconds")
        return record
