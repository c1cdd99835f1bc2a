"""
Redis-backed session store.
Keeps the session id in Redis so several processes can share one session.
"""

import logging
from typing import Optional

import redis.asyncio as aioredis

from shared_config import settings

logger = logging.getLogger(__name__)

# Async Redis client (shared by every RedisSessionStore built without one)
async_redis: aioredis.Redis = None


async def get_async_redis() -> aioredis.Redis:
    """Get or create async Redis client."""
    global async_redis
    if async_redis is None:
        async_redis = aioredis.from_url(settings.REDIS_URL, decode_responses=True)
    return async_redis


class RedisSessionStore:
    """Session store backed by redis.asyncio."""

    def __init__(
        self,
        redis_client: aioredis.Redis = None,
        key_prefix: str = "log-tracker",
        ttl_seconds: Optional[int] = None,
    ):
        self._redis = redis_client
        self.key_prefix = key_prefix
        self.ttl_seconds = ttl_seconds

    def _key(self, name: str) -> str:
        return f"{self.key_prefix}:{name}" if self.key_prefix else name

    async def _client(self) -> aioredis.Redis:
        if self._redis is None:
            self._redis = await get_async_redis()
        return self._redis

    async def get(self, name: str) -> Optional[str]:
        redis = await self._client()
        value = await redis.get(self._key(name))
        if isinstance(value, bytes):
            value = value.decode()
        return value

    async def set(self, name: str, value: str):
        redis = await self._client()
        if self.ttl_seconds:
            await redis.set(self._key(name), value, ex=self.ttl_seconds)
        else:
            await redis.set(self._key(name), value)
        logger.debug(f"Stored {name} in Redis (ttl={self.ttl_seconds})")

    async def clear(self, name: str):
        redis = await self._client()
        await redis.delete(self._key(name))
