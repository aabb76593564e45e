"""
Documentaries API Router

- GET /cache         refresh-job semantics: the daily list or a 500 error
- GET /docs          daily list through the full recovery chain
- GET /docs/search   single documentary lookup by title
"""

from typing import Any, Dict

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import get_settings
from ..core.logging import get_logger
from ..jobs.refresh import CORS_HEADERS, GENERIC_ERROR, run_refresh_job
from ..models.response import DocsResponse, ErrorResponse
from ..services.catalog_service import get_catalog_service
from ..services.search_service import get_search_service

logger = get_logger(__name__)
settings = get_settings()

router = APIRouter(tags=["documentaries"])
limiter = Limiter(key_func=get_remote_address)


@router.get("/cache", responses={500: {"description": "Pipeline or configuration failure"}})
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def get_cached_docs(request: Request):
    """
    Today's curated list as a bare JSON array.

    Runs the pipeline synchronously on a cache miss. Any failure returns
    ``{"error": "Failed to load movies"}`` with status 500.
    """
    try:
        items = await run_refresh_job(get_catalog_service())
    except Exception as e:
        logger.error("cache_endpoint_failed", error=str(e))
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR},
            headers=CORS_HEADERS,
        )

    return JSONResponse(
        content=[item.to_wire() for item in items],
        headers=CORS_HEADERS,
    )


@router.get("/docs", response_model=DocsResponse)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def get_docs(request: Request):
    """
    Today's curated list for the front-end.

    Falls back to the last good list, then to curated titles, so this
    endpoint always answers 200. ``source`` says which layer was used.
    """
    catalog = get_catalog_service()
    items, source, error = await catalog.load()

    logger.info("docs_request", source=source.value, count=len(items), error=error)

    return DocsResponse(
        items=[item.to_wire() for item in items],
        source=source,
        count=len(items),
        dateKey=catalog.current_key(),
        error=error,
    )


@router.get(
    "/docs/search",
    response_model=Dict[str, Any],
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
@limiter.limit(f"{settings.rate_limit_per_minute}/minute")
async def search_docs(
    request: Request,
    q: str = Query(..., min_length=2, description="Documentary title"),
):
    """Look up a documentary by title. Non-documentaries return 404."""
    logger.info("search_request", query=q)

    item = await get_search_service().search(q)
    return item.to_wire()
