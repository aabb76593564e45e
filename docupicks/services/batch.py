"""
Batch Scheduler

Runs an async stage over items in fixed-size groups with a pause between
groups, keeping the aggregate call rate under OMDb's limit.
"""

import asyncio
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from ..core.logging import get_logger
from ..models.movie import CandidateItem, ValidatedItem

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class BatchScheduler:
    """
    Sequential batches, concurrent members.

    Within a batch results keep input order; batch N+1 starts only after
    batch N has finished and the inter-batch delay has elapsed. There is no
    delay after the last batch.
    """

    def __init__(
        self,
        batch_size: int,
        delay_ms: int,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self.batch_size = batch_size
        self.delay_ms = max(0, delay_ms)
        self._sleep = sleep

    async def run(
        self,
        items: Sequence[T],
        stage: Callable[[T], Awaitable[Optional[R]]],
    ) -> List[R]:
        """Apply ``stage`` to every item; None results are dropped."""
        collected: List[R] = []
        total = len(items)

        for start in range(0, total, self.batch_size):
            batch = items[start:start + self.batch_size]
            results = await asyncio.gather(*(stage(item) for item in batch))
            kept = [r for r in results if r is not None]
            collected.extend(kept)

            logger.debug(
                "batch_completed",
                batch=start // self.batch_size + 1,
                size=len(batch),
                kept=len(kept),
            )

            if start + self.batch_size < total and self.delay_ms:
                await self._sleep(self.delay_ms / 1000)

        return collected

    async def validate_all(
        self,
        items: Sequence[CandidateItem],
        validate: Callable[[CandidateItem], Awaitable[Optional[ValidatedItem]]],
    ) -> List[ValidatedItem]:
        validated = await self.run(items, validate)
        logger.info("batch_validated", candidates=len(items), validated=len(validated))
        return validated
