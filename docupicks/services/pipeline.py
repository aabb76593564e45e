"""
Documentary Pipeline

Keyword resolution → discovery → batched cross-validation → assembly.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Sequence

import httpx

from ..config import PipelineConfig
from ..core.logging import get_logger
from ..models.movie import ValidatedItem
from .assembler import ResultAssembler
from .batch import BatchScheduler
from .discovery import DiscoveryService
from .fallback import FALLBACK_TITLES
from .omdb_client import OMDbClient
from .tmdb_client import TMDBClient
from .validator import CrossValidator

logger = get_logger(__name__)


class DocumentaryPipeline:
    """
    One full refresh of the curated list.

    Components are wired from a single PipelineConfig and share one
    httpx.AsyncClient. Use ``DocumentaryPipeline.open(config)`` to get an
    instance whose HTTP client is closed afterwards.
    """

    def __init__(
        self,
        config: PipelineConfig,
        client: httpx.AsyncClient,
        fallback_titles: Sequence[str] = FALLBACK_TITLES,
        scheduler: Optional[BatchScheduler] = None,
    ):
        self.config = config
        self.fallback_titles = fallback_titles

        self.tmdb = TMDBClient(config, client)
        self.omdb = OMDbClient(config, client)
        self.scheduler = scheduler or BatchScheduler(config.batch_size, config.inter_batch_delay_ms)
        self.discovery = DiscoveryService(config, self.tmdb)
        self.validator = CrossValidator(config, self.omdb, self.tmdb)
        self.assembler = ResultAssembler(config, self.omdb, self.tmdb, self.scheduler)

    @classmethod
    @asynccontextmanager
    async def open(cls, config: PipelineConfig, **kwargs) -> AsyncIterator["DocumentaryPipeline"]:
        async with httpx.AsyncClient(timeout=config.http_timeout_seconds) as client:
            yield cls(config, client, **kwargs)

    async def run(self) -> List[ValidatedItem]:
        """
        Returns:
            Up to ``result_limit`` documentaries, best rated first
        """
        keyword_filter = await self.discovery.keyword_filter()
        candidates = await self.discovery.collect(keyword_filter)
        validated = await self.scheduler.validate_all(candidates, self.validator.validate)

        results = await self.assembler.assemble(
            validated,
            self.config.result_limit,
            self.fallback_titles,
        )

        logger.info(
            "pipeline_complete",
            candidates=len(candidates),
            validated=len(validated),
            results=len(results),
        )
        return results
