"""
Discovery Service

Pages through TMDB discover and keeps in-window, title-unique candidates.
"""

from typing import List, Optional, Set

from ..config import PipelineConfig
from ..core.logging import get_logger
from ..models.movie import CandidateItem
from .classifier import year_in_window
from .tmdb_client import TMDBClient, build_keyword_filter

logger = get_logger(__name__)


def dedupe_by_title(items: List[CandidateItem], seen: Optional[Set[str]] = None) -> List[CandidateItem]:
    """
    Drop candidates whose normalized title was already seen.

    ``seen`` is updated in place so it can span several pages.
    """
    seen = set() if seen is None else seen
    unique = []
    for item in items:
        key = item.normalized_title
        if not key or key in seen:
            continue
        seen.add(key)
        unique.append(item)
    return unique


class DiscoveryService:
    """Collects documentary candidates for one pipeline run."""

    def __init__(self, config: PipelineConfig, tmdb: TMDBClient):
        self.config = config
        self.tmdb = tmdb

    async def keyword_filter(self) -> Optional[str]:
        """Resolve configured topics to a TMDB ``with_keywords`` filter."""
        ids = await self.tmdb.resolve_keyword_ids(list(self.config.topic_keywords))
        return build_keyword_filter(ids)

    def in_window(self, item: CandidateItem) -> bool:
        cfg = self.config
        return year_in_window(item.release_year, cfg.min_year, cfg.max_year)

    async def collect(self, keyword_filter: Optional[str] = None) -> List[CandidateItem]:
        """
        Fetch pages 1..max_pages until result_limit candidates are held.

        Every returned candidate has a release year in [min_year, max_year].
        """
        cfg = self.config
        candidates: List[CandidateItem] = []
        seen: Set[str] = set()
        page = 1

        while len(candidates) < cfg.result_limit and page <= cfg.max_pages:
            results = await self.tmdb.discover(page, keyword_filter)
            fresh = dedupe_by_title([c for c in results if self.in_window(c)], seen)
            candidates.extend(fresh)

            logger.debug(
                "discovery_page",
                page=page,
                returned=len(results),
                kept=len(fresh),
            )
            page += 1

        logger.info("discovery_complete", candidates=len(candidates), pages=page - 1)
        return candidates
