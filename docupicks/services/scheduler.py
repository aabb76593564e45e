"""
Background Job Scheduler

Manages scheduled background tasks using APScheduler.
- Daily refresh: builds the curated list shortly after midnight UTC so the
  first request of the day hits a warm cache
"""

from datetime import datetime
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from ..config import get_settings
from ..core.logging import get_logger
from ..models.response import RefreshResult

logger = get_logger(__name__)
settings = get_settings()

# Global scheduler instance
_scheduler: Optional[AsyncIOScheduler] = None


def get_scheduler() -> AsyncIOScheduler:
    """Get or create the scheduler instance."""
    global _scheduler
    if _scheduler is None:
        _scheduler = AsyncIOScheduler(timezone="UTC")
    return _scheduler


class SchedulerService:
    """
    Manages background job scheduling.

    Jobs:
    1. Daily Refresh (once a day, default 00:05 UTC)
       - Skips the pipeline if today's key is already cached
       - Otherwise discovers, validates and caches the list
    """

    def __init__(self, scheduler: Optional[AsyncIOScheduler] = None):
        self.scheduler = scheduler or get_scheduler()
        self._refresh_job_id = "daily_refresh"
        self._last_result: Optional[RefreshResult] = None

    async def _run_refresh(self) -> RefreshResult:
        """Execute the refresh job; failures are logged, not raised."""
        from ..jobs.refresh import run_refresh_job
        from .catalog_service import get_catalog_service

        catalog = get_catalog_service()
        key = catalog.current_key()

        logger.info("scheduler_job_started", job="refresh")
        try:
            items = await run_refresh_job(catalog)
            result = RefreshResult(success=True, dateKey=key, count=len(items), cached=True)
            logger.info("scheduler_job_completed", job="refresh", count=len(items))
        except Exception as e:
            logger.error("scheduler_job_failed", job="refresh", error=str(e))
            result = RefreshResult(success=False, dateKey=key, message=str(e))

        self._last_result = result
        return result

    def setup_jobs(self):
        """Configure and add all scheduled jobs."""
        self.scheduler.add_job(
            self._run_refresh,
            trigger=CronTrigger(
                hour=settings.refresh_cron_hour,
                minute=settings.refresh_cron_minute,
                timezone="UTC",
            ),
            id=self._refresh_job_id,
            name="Daily Documentary Refresh",
            replace_existing=True,
            max_instances=1,
        )

        logger.info(
            "scheduler_jobs_configured",
            refresh_schedule=f"daily at {settings.refresh_cron_hour:02d}:{settings.refresh_cron_minute:02d} UTC",
        )

    def start(self):
        """Start the scheduler."""
        if not self.scheduler.running:
            self.setup_jobs()
            self.scheduler.start()
            logger.info("scheduler_started")

    def stop(self):
        """Stop the scheduler gracefully."""
        if self.scheduler.running:
            self.scheduler.shutdown(wait=True)
            logger.info("scheduler_stopped")

    def get_job_status(self) -> dict:
        """Get status of all scheduled jobs."""
        jobs = []
        for job in self.scheduler.get_jobs():
            jobs.append({
                "id": job.id,
                "name": job.name,
                "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
            })

        return {
            "running": self.scheduler.running,
            "jobs": jobs,
            "last_result": self._last_result.model_dump(by_alias=True) if self._last_result else None,
            "current_time": datetime.utcnow().isoformat(),
        }

    async def trigger_refresh_now(self) -> RefreshResult:
        """Manually trigger the refresh job."""
        logger.info("manual_trigger", job="refresh")
        return await self._run_refresh()


# Singleton instance
_scheduler_service: Optional[SchedulerService] = None


def get_scheduler_service() -> SchedulerService:
    """Get singleton SchedulerService instance."""
    global _scheduler_service
    if _scheduler_service is None:
        _scheduler_service = SchedulerService()
    return _scheduler_service
