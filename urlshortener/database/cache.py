"""Redis read-through cache for short code lookups.

Records are never mutated or deleted, so a cached code -> URL pair cannot go
stale; the TTL only bounds memory use. Cache failures are logged and treated
as misses, the store stays authoritative.
"""

import logging
from typing import Optional

import redis.asyncio as redis


class RedisCache:
    """Redis cache for resolved short codes."""

    KEY_PREFIX = "url:shortener"

    def __init__(
        self,
        redis_url: Optional[str] = None,
        ttl_seconds: int = 3600,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis cache.

        Args:
            redis_url: Redis connection URL (e.g., redis://localhost:6379/0)
            ttl_seconds: TTL for cached entries
            logger: Optional logger instance
        """
        self.redis_url = redis_url
        self.ttl_seconds = ttl_seconds
        self.logger = logger or logging.getLogger(__name__)
        self.enabled = redis_url is not None
        self.client: Optional[redis.Redis] = None

        if self.enabled:
            self.logger.info(f"Redis cache enabled with TTL={ttl_seconds}s")

    async def connect(self) -> None:
        """Connect to Redis. Disables the cache if the server is unreachable."""
        if not self.enabled:
            return

        try:
            self.client = redis.from_url(
                self.redis_url,
                encoding="utf-8",
                decode_responses=True,
            )
            await self.client.ping()
            self.logger.info("Connected to Redis")
        except redis.RedisError as e:
            self.logger.error(f"Failed to connect to Redis: {e}")
            self.enabled = False

    def get_cache_key(self, short_code: str) -> str:
        return f"{self.KEY_PREFIX}:{short_code}"

    async def get(self, short_code: str) -> Optional[str]:
        """Get the cached original URL for a short code, or None."""
        if not self.enabled or not self.client:
            return None

        try:
            return await self.client.get(self.get_cache_key(short_code))
        except redis.RedisError as e:
            self.logger.error(f"Cache get error: {e}")
            return None

    async def set(self, short_code: str, original_url: str) -> bool:
        """Cache the original URL for a short code.

        Returns:
            True if successful
        """
        if not self.enabled or not self.client:
            return False

        try:
            await self.client.setex(self.get_cache_key(short_code), self.ttl_seconds, original_url)
            return True
        except redis.RedisError as e:
            self.logger.error(f"Cache set error: {e}")
            return False

    async def ping(self) -> bool:
        if not self.enabled or not self.client:
            return False
        try:
            return bool(await self.client.ping())
        except redis.RedisError as e:
            self.logger.error(f"Cache ping error: {e}")
            return False

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
