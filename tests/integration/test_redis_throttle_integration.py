import asyncio
from uuid import uuid4

import pytest

from activator.domain.errors import RateLimited
from activator.infrastructure.redis_cache.throttle import RedisIssueThrottle


@pytest.mark.asyncio
async def test_second_issue_inside_window_is_denied(redis_client):
    throttle = RedisIssueThrottle(redis_client, ttl_seconds=60)
    user = {"id": str(uuid4())}

    assert await throttle.throttle(user) == user
    with pytest.raises(RateLimited):
        await throttle.throttle(user)

    ttl = await redis_client.ttl(f"throttle:{user['id']}")
    assert 0 < ttl <= 60


@pytest.mark.asyncio
async def test_issue_allowed_again_after_window(redis_client):
    throttle = RedisIssueThrottle(redis_client, ttl_seconds=1)
    user = {"id": str(uuid4())}

    await throttle.throttle(user)
    await asyncio.sleep(1.2)
    assert await throttle.throttle(user) == user
