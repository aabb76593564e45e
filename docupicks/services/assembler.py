"""
Result Assembler

Turns validated documentaries into the final, rating-sorted, capped list,
topping it up from the curated fallback titles when discovery comes up short.
"""

from typing import Iterable, List, Optional, Sequence

from ..config import PipelineConfig
from ..core.logging import get_logger
from ..models.movie import ValidatedItem, parse_year
from .batch import BatchScheduler
from .omdb_client import OMDbClient
from .tmdb_client import TMDBClient

logger = get_logger(__name__)


FALLBACK_BELOW_LIMIT = "below_limit"
FALLBACK_EMPTY = "empty"


def rating_key(item: ValidatedItem) -> float:
    rating = item.numeric_rating
    return rating if rating is not None else float("-inf")


def sort_by_rating(items: Iterable[ValidatedItem]) -> List[ValidatedItem]:
    """Highest rating first; unrated last; ties keep input order."""
    return sorted(items, key=rating_key, reverse=True)


def dedupe_by_external_id(items: Iterable[ValidatedItem]) -> List[ValidatedItem]:
    """First occurrence wins."""
    seen = set()
    unique = []
    for item in items:
        if item.dedup_key in seen:
            continue
        seen.add(item.dedup_key)
        unique.append(item)
    return unique


def needs_fallback(count: int, limit: int, mode: str = FALLBACK_BELOW_LIMIT) -> bool:
    if mode == FALLBACK_EMPTY:
        return count == 0
    return count < limit


class ResultAssembler:
    """
    Sort, cap and (when needed) supplement validated results.

    The OMDb/TMDB clients are only needed for the fallback path; an
    assembler built without them never fetches.
    """

    def __init__(
        self,
        config: PipelineConfig,
        omdb: Optional[OMDbClient] = None,
        tmdb: Optional[TMDBClient] = None,
        scheduler: Optional[BatchScheduler] = None,
    ):
        self.config = config
        self.omdb = omdb
        self.tmdb = tmdb
        self.scheduler = scheduler or BatchScheduler(config.batch_size, config.inter_batch_delay_ms)

    def rank(self, items: Iterable[ValidatedItem], limit: int) -> List[ValidatedItem]:
        return sort_by_rating(dedupe_by_external_id(items))[:max(0, limit)]

    async def assemble(
        self,
        validated: Sequence[ValidatedItem],
        limit: int,
        fallback_titles: Sequence[str] = (),
    ) -> List[ValidatedItem]:
        """
        Args:
            validated: Cross-validated items in discovery order
            limit: Maximum number of results
            fallback_titles: Curated titles looked up directly on OMDb

        Returns:
            At most ``limit`` items sorted by rating descending
        """
        ranked = self.rank(validated, limit)

        if not needs_fallback(len(validated), limit, self.config.fallback_mode):
            return ranked

        if not fallback_titles or self.omdb is None:
            logger.info("fallback_unavailable", validated=len(validated), limit=limit)
            return ranked

        logger.info(
            "fallback_triggered",
            validated=len(validated),
            limit=limit,
            mode=self.config.fallback_mode,
        )
        fallback = await self.scheduler.run(list(fallback_titles), self.fetch_fallback)

        merged = self.rank(list(validated) + fallback, limit)
        logger.info("fallback_merged", fallback=len(fallback), total=len(merged))
        return merged

    async def fetch_fallback(self, title: str) -> Optional[ValidatedItem]:
        """
        Look up a curated title on OMDb, skipping discovery and classification.
        """
        try:
            record = await self.omdb.find(title, media_type=None)
            if record is None:
                logger.debug("fallback_title_not_found", title=title)
                return None

            item = ValidatedItem.from_omdb(record)
            if self.config.enrich_fallback and self.tmdb is not None:
                await self._enrich(item)
            return item

        except Exception as e:
            logger.warning("fallback_lookup_failed", title=title, error=str(e))
            return None

    async def _enrich(self, item: ValidatedItem) -> None:
        tmdb_id = await self.tmdb.search_movie_id(item.title, parse_year(item.year))
        if tmdb_id is None:
            return
        item.tmdb_id = tmdb_id
        item.watch_providers = await self.tmdb.get_watch_providers(tmdb_id)
