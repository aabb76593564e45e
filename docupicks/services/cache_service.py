"""
Redis Cache Service

Daily key-value cache for curated documentary lists.
Keys look like ``DOCS-2025-06-01``; each day's list is written once and
expires after 24 hours.
"""

import json
import time
from datetime import date, datetime, timezone
from typing import Dict, List, Optional, Tuple

import redis.asyncio as redis
from pydantic import ValidationError

from ..config import get_settings
from ..core.logging import get_logger
from ..models.cache import CacheEntry
from ..models.movie import ValidatedItem

logger = get_logger(__name__)
settings = get_settings()

# Redis client singleton
_redis_client: Optional[redis.Redis] = None


def create_redis_client() -> Optional[redis.Redis]:
    """New Redis client (connection is made lazily on first command)."""
    if not settings.redis_url:
        logger.debug("redis_not_configured")
        return None

    try:
        return redis.from_url(
            settings.redis_url,
            decode_responses=True,
            socket_timeout=5,
            socket_connect_timeout=5,
        )
    except Exception as e:
        logger.warning("redis_connection_failed", error=str(e))
        return None


def get_redis_client() -> Optional[redis.Redis]:
    """Get or create the process-wide Redis client."""
    global _redis_client

    if _redis_client is None:
        _redis_client = create_redis_client()
    return _redis_client


def daily_key(prefix: str, day: Optional[date] = None) -> str:
    """Cache key for a calendar day (UTC)."""
    day = day or datetime.now(timezone.utc).date()
    return f"{prefix}-{day.isoformat()}"


def latest_key(prefix: str) -> str:
    """Key of the long-lived copy of the last good list."""
    return f"{prefix}-latest"


class CacheService:
    """
    Get/put gateway over Redis.

    Stored value: ``{"id": key, "data": [...], "ttl": <expiry epoch>}``.
    Redis SETEX evicts the key; ``ttl`` is checked on read as well so an
    entry is never served past its expiry.

    Falls back to in-memory dict if Redis unavailable.
    """

    def __init__(self, redis_client=None, clock=time.time):
        self.redis = redis_client
        self._clock = clock
        # Fallback in-memory cache (for dev without Redis): key -> (value, expiry)
        self._memory_cache: Dict[str, Tuple[str, float]] = {}

    def _is_available(self) -> bool:
        """Check if Redis is available."""
        return self.redis is not None

    # =========================================================================
    # RAW OPERATIONS
    # =========================================================================

    async def _get_raw(self, key: str) -> Optional[str]:
        if self._is_available():
            try:
                return await self.redis.get(key)
            except Exception as e:
                logger.warning("cache_get_failed", key=key, error=str(e))

        cached = self._memory_cache.get(key)
        if cached is None:
            return None
        value, expiry = cached
        if self._clock() >= expiry:
            self._memory_cache.pop(key, None)
            return None
        return value

    async def _set_raw(self, key: str, value: str, ttl_seconds: int) -> None:
        if self._is_available():
            try:
                await self.redis.setex(key, ttl_seconds, value)
                return
            except Exception as e:
                logger.warning("cache_set_failed", key=key, error=str(e))

        now = self._clock()
        # Daily keys are rarely re-read once the day passes
        self._memory_cache = {
            k: v for k, v in self._memory_cache.items() if v[1] > now
        }
        self._memory_cache[key] = (value, now + ttl_seconds)

    # =========================================================================
    # CACHE ENTRIES
    # =========================================================================

    async def get(self, date_key: str) -> Optional[CacheEntry]:
        """
        Read a cache entry.

        Returns:
            The entry, or None on miss, expiry or an unparsable payload
        """
        raw = await self._get_raw(date_key)
        if not raw:
            logger.debug("cache_miss", key=date_key)
            return None

        try:
            entry = CacheEntry.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as e:
            logger.warning("cache_corrupt", key=date_key, error=str(e))
            return None

        if entry.is_expired(self._clock()):
            logger.debug("cache_expired", key=date_key)
            return None

        logger.debug("cache_hit", key=date_key, count=len(entry.payload))
        return entry

    async def put(
        self,
        date_key: str,
        payload: List[ValidatedItem],
        ttl_seconds: int,
    ) -> CacheEntry:
        """Write (or replace) an entry; last writer wins."""
        entry = CacheEntry(
            id=date_key,
            data=list(payload),
            ttl=int(self._clock()) + ttl_seconds,
        )
        await self._set_raw(
            date_key,
            json.dumps(entry.model_dump(mode="json", by_alias=True)),
            ttl_seconds,
        )
        logger.info("cache_written", key=date_key, count=len(entry.payload), ttl=ttl_seconds)
        return entry

    # =========================================================================
    # STATS
    # =========================================================================

    async def get_stats(self) -> dict:
        """Get cache statistics."""
        if not self._is_available():
            return {"status": "unavailable", "type": "memory", "keys": len(self._memory_cache)}

        try:
            info = await self.redis.info("stats")
            return {
                "status": "connected",
                "type": "redis",
                "hits": info.get("keyspace_hits", 0),
                "misses": info.get("keyspace_misses", 0),
            }
        except Exception as e:
            return {"status": "error", "error": str(e)}


# Singleton instance
_cache_service: Optional[CacheService] = None


def get_cache_service() -> CacheService:
    """Get singleton CacheService instance."""
    global _cache_service
    if _cache_service is None:
        _cache_service = CacheService(get_redis_client())
    return _cache_service
