"""
Scheduler API Router

Endpoints for monitoring and manually triggering the daily refresh.
"""

from datetime import datetime

from fastapi import APIRouter

from ..core.logging import get_logger
from ..services.cache_service import get_cache_service
from ..services.scheduler import get_scheduler_service

logger = get_logger(__name__)

router = APIRouter(prefix="/scheduler", tags=["scheduler"])


@router.get("/status")
async def get_scheduler_status():
    """
    Get current scheduler status and job information.
    
    Returns:
        - Whether scheduler is running
        - Jobs with next run times and the last refresh outcome
        - Cache backend statistics
    """
    service = get_scheduler_service()
    status = service.get_job_status()
    status["cache"] = await get_cache_service().get_stats()
    return status


@router.post("/trigger/refresh")
async def trigger_refresh():
    """
    Manually trigger the daily refresh.
    
    A no-op when today's list is already cached.
    """
    logger.info("manual_refresh_trigger")
    
    service = get_scheduler_service()
    result = await service.trigger_refresh_now()
    
    return {
        **result.model_dump(by_alias=True),
        "timestamp": datetime.utcnow().isoformat()
    }


@router.post("/start")
async def start_scheduler():
    """Start the background scheduler."""
    service = get_scheduler_service()
    service.start()
    return {"success": True, "message": "Scheduler started"}


@router.post("/stop")
async def stop_scheduler():
    """Stop the background scheduler."""
    service = get_scheduler_service()
    service.stop()
    return {"success": True, "message": "Scheduler stopped"}
