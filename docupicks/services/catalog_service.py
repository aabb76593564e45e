"""
Catalog Service

Serving path for the daily documentary list.

Read-through: today's cache entry is returned verbatim when present;
otherwise the pipeline runs synchronously and its result is cached.

Recovery chain (``load``): cache → pipeline → stale copy → static titles.
"""

import asyncio
from datetime import date
from typing import Callable, Dict, List, Optional, Tuple

from ..config import Settings, get_settings
from ..core.exceptions import DocuPicksException, UpstreamError
from ..core.logging import get_logger
from ..models.movie import ValidatedItem
from ..models.response import ResultSource
from .cache_service import CacheService, daily_key, get_cache_service, latest_key
from .fallback import static_items
from .pipeline import DocumentaryPipeline

logger = get_logger(__name__)

LOAD_ERROR = "Failed to load movies"


class CatalogService:
    """
    Daily curated list with an in-process single-flight guard.

    Concurrent cache misses for the same key in one process wait on a
    per-key lock and re-check the cache, so the pipeline runs once. Separate
    processes (or Lambda instances) are not coordinated.
    """

    def __init__(
        self,
        settings: Settings,
        cache: CacheService,
        pipeline_factory: Callable = DocumentaryPipeline.open,
        today: Callable[[], Optional[date]] = lambda: None,
    ):
        self.settings = settings
        self.cache = cache
        self.pipeline_factory = pipeline_factory
        self._today = today
        self._locks: Dict[str, asyncio.Lock] = {}

    def current_key(self) -> str:
        return daily_key(self.settings.cache_prefix, self._today())

    def _lock_for(self, key: str) -> asyncio.Lock:
        if key not in self._locks:
            # Old days' locks are never needed again
            self._locks = {k: v for k, v in self._locks.items() if v.locked()}
            self._locks[key] = asyncio.Lock()
        return self._locks[key]

    async def get_daily(self) -> Tuple[List[ValidatedItem], ResultSource]:
        """
        Today's list, running the pipeline on a cache miss.

        Raises:
            ConfigurationError: required settings are missing
            UpstreamError: the pipeline produced nothing
        """
        config = self.settings.pipeline_config()
        key = self.current_key()

        entry = await self.cache.get(key)
        if entry is not None:
            return entry.payload, ResultSource.CACHE

        async with self._lock_for(key):
            entry = await self.cache.get(key)
            if entry is not None:
                logger.info("single_flight_cache_hit", key=key)
                return entry.payload, ResultSource.CACHE

            logger.info("pipeline_started", key=key)
            async with self.pipeline_factory(config) as pipeline:
                results = await pipeline.run()

            if not results:
                # Leave the key absent so the next request retries
                raise UpstreamError("Pipeline produced no documentaries")

            await self.cache.put(key, results, config.cache_ttl_seconds)
            await self.cache.put(
                latest_key(self.settings.cache_prefix),
                results,
                self.settings.stale_ttl_seconds,
            )
            return results, ResultSource.PIPELINE

    async def load(self) -> Tuple[List[ValidatedItem], ResultSource, Optional[str]]:
        """
        Never fails: degrades to the last good list, then to curated titles.

        Returns:
            (items, source, error) where error is set only when the list
            comes from the stale copy or static titles after a failure
        """
        limit = self.settings.result_limit

        try:
            items, source = await self.get_daily()
            return items[:limit], source, None
        except DocuPicksException as e:
            logger.error("catalog_refresh_failed", error=e.message)
            error = e.message
        except Exception as e:
            logger.error("catalog_refresh_failed", error=str(e))
            error = LOAD_ERROR

        stale = await self.cache.get(latest_key(self.settings.cache_prefix))
        if stale is not None and stale.payload:
            logger.warning("catalog_serving_stale", key=stale.date_key)
            return stale.payload[:limit], ResultSource.STALE, error

        logger.warning("catalog_serving_static")
        return static_items(limit), ResultSource.STATIC, error


# Singleton instance
_catalog_service: Optional[CatalogService] = None


def get_catalog_service() -> CatalogService:
    """Get singleton CatalogService instance."""
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogService(get_settings(), get_cache_service())
    return _catalog_service
