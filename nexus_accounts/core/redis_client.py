"""
Account Service — Redis client singletons

The store is synchronous, so it gets a blocking client. The SSE change
stream runs inside the event loop and gets an asyncio client.
"""
import redis
import redis.asyncio as aioredis
from nexus_accounts.core.config import get_settings

_redis_client: redis.Redis | None = None
_async_redis_client: aioredis.Redis | None = None


def get_redis() -> redis.Redis:
    global _redis_client
    if _redis_client is None:
        settings = get_settings()
        _redis_client = redis.Redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=settings.HEALTH_CHECK_TIMEOUT,
        )
    return _redis_client


def get_async_redis() -> aioredis.Redis:
    global _async_redis_client
    if _async_redis_client is None:
        settings = get_settings()
        _async_redis_client = aioredis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_connect_timeout=settings.HEALTH_CHECK_TIMEOUT,
        )
    return _async_redis_client


async def close_redis():
    global _redis_client, _async_redis_client
    if _async_redis_client:
        await _async_redis_client.aclose()
        _async_redis_client = None
    if _redis_client:
        _redis_client.close()
        _redis_client = None
