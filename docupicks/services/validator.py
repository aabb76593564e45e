"""
Cross-Validator

Confirms a TMDB candidate against OMDb and enriches it with streaming
providers. Rejections are ordinary outcomes (None), not errors.
"""

from typing import Optional

from ..config import PipelineConfig
from ..core.logging import get_logger
from ..models.movie import CandidateItem, ValidatedItem, parse_year, parse_rating
from .classifier import is_documentary, year_in_window
from .omdb_client import OMDbClient
from .tmdb_client import TMDBClient

logger = get_logger(__name__)


class CrossValidator:
    """
    Validation steps, stopping at the first failure:

    1. OMDb title + year match
    2. Year inside the configured window
    3. Documentary heuristic on Genre / Plot / overview
    4. Numeric IMDb rating (not "N/A")
    5. Streaming providers (empty list is fine)
    """

    def __init__(self, config: PipelineConfig, omdb: OMDbClient, tmdb: TMDBClient):
        self.config = config
        self.omdb = omdb
        self.tmdb = tmdb

    async def validate(self, candidate: CandidateItem) -> Optional[ValidatedItem]:
        try:
            return await self._validate(candidate)
        except Exception as e:
            logger.warning("validation_failed", title=candidate.title, error=str(e))
            return None

    async def _validate(self, candidate: CandidateItem) -> Optional[ValidatedItem]:
        cfg = self.config
        release_year = candidate.release_year

        record = await self.omdb.find(candidate.title, release_year)
        if record is None:
            logger.debug("validation_rejected", title=candidate.title, reason="no_match")
            return None

        year = parse_year(record.get("Year")) or release_year
        if not year_in_window(year, cfg.min_year, cfg.max_year, cfg.year_tolerance):
            logger.debug("validation_rejected", title=candidate.title, reason="year", year=year)
            return None

        texts = (record.get("Genre"), record.get("Plot"), candidate.overview)
        if not is_documentary(texts, cfg.documentary_terms):
            logger.debug("validation_rejected", title=candidate.title, reason="not_documentary")
            return None

        if parse_rating(record.get("imdbRating")) is None:
            logger.debug("validation_rejected", title=candidate.title, reason="no_rating")
            return None

        providers = await self.tmdb.get_watch_providers(candidate.tmdb_id)

        item = ValidatedItem.from_omdb(record, candidate, providers)
        item.normalized_year = year
        return item
