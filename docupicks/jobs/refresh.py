"""
Daily Refresh Job

Builds today's curated documentary list and stores it in the cache.
Runs from APScheduler in the web service, or standalone as a serverless
function via ``handler``.
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

from ..config import get_settings
from ..core.exceptions import ConfigurationError
from ..core.logging import bind_run_context, get_logger, setup_logging
from ..models.movie import ValidatedItem
from ..services.cache_service import CacheService, create_redis_client
from ..services.catalog_service import CatalogService, get_catalog_service

logger = get_logger(__name__)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Content-Type": "application/json",
}
GENERIC_ERROR = "Failed to load movies"


def _response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body),
    }


async def run_refresh_job(catalog: Optional[CatalogService] = None) -> List[ValidatedItem]:
    """
    Populate today's cache key if it is absent.

    Returns the cached or freshly built list. Configuration and upstream
    failures propagate to the caller.
    """
    catalog = catalog or get_catalog_service()
    key = catalog.current_key()
    bind_run_context(cache_key=key)

    items, source = await catalog.get_daily()
    logger.info("refresh_job_complete", source=source.value, count=len(items))
    return items


async def handle_refresh(catalog: Optional[CatalogService] = None) -> Dict[str, Any]:
    """Run the refresh and shape an API-Gateway style response."""
    try:
        items = await run_refresh_job(catalog)
        return _response(200, [item.to_wire() for item in items])
    except ConfigurationError as e:
        logger.error("refresh_job_misconfigured", error=e.message)
    except Exception as e:
        logger.exception("refresh_job_failed", error=str(e))
    return _response(500, {"error": GENERIC_ERROR})


async def _handle_invocation() -> Dict[str, Any]:
    # Each invocation runs in a fresh event loop, so it gets its own Redis client
    redis_client = create_redis_client()
    catalog = CatalogService(get_settings(), CacheService(redis_client))
    try:
        return await handle_refresh(catalog)
    finally:
        if redis_client is not None:
            await redis_client.aclose()


def handler(event: Optional[dict] = None, context: Any = None) -> Dict[str, Any]:
    """Serverless entry point. Takes no input parameters."""
    setup_logging()
    logger.info("refresh_handler_invoked", environment=get_settings().environment)
    return asyncio.run(_handle_invocation())
