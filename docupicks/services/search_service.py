"""
Search Service

Looks up a single documentary by title on OMDb and attaches TMDB
streaming providers.
"""

from typing import Optional

from ..config import get_settings
from ..core.exceptions import NotFoundError, UpstreamError
from ..core.logging import get_logger
from ..models.movie import ValidatedItem
from .classifier import is_documentary
from .pipeline import DocumentaryPipeline

logger = get_logger(__name__)


class SearchService:
    """
    Title search restricted to documentaries.

    Unlike the pipeline, only the OMDb Genre field is checked, and no year
    window or rating requirement applies.
    """

    GENRE_TERMS = ("documentary",)

    def __init__(self, pipeline_factory=DocumentaryPipeline.open):
        self.pipeline_factory = pipeline_factory

    async def search(self, query: str) -> ValidatedItem:
        """
        Raises:
            NotFoundError: no OMDb match, or the match is not a documentary
            ConfigurationError: API keys are missing
            UpstreamError: the OMDb request itself failed
        """
        query = (query or "").strip()
        config = get_settings().pipeline_config()

        async with self.pipeline_factory(config) as pipeline:
            record = await pipeline.omdb.lookup(query, media_type=None)

            if record is None:
                logger.warning("search_lookup_failed", query=query)
                raise UpstreamError("Documentary search is unavailable")

            if record.get("Response") != "True":
                reason = record.get("Error")
                logger.info("search_no_match", query=query, reason=reason)
                raise NotFoundError("Documentary", query, reason=reason)

            if not is_documentary([record.get("Genre")], self.GENRE_TERMS):
                logger.info("search_not_documentary", query=query, genre=record.get("Genre"))
                raise NotFoundError("Documentary", query, reason="Not a documentary")

            item = ValidatedItem.from_omdb(record)
            if item.imdb_id:
                item.tmdb_id = await pipeline.tmdb.find_by_imdb_id(item.imdb_id)
            if item.tmdb_id is not None:
                item.watch_providers = await pipeline.tmdb.get_watch_providers(item.tmdb_id)

        logger.info("search_match", query=query, imdb_id=item.imdb_id)
        return item


# Singleton
_search_service: Optional[SearchService] = None

def get_search_service() -> SearchService:
    global _search_service
    if _search_service is None:
        _search_service = SearchService()
    return _search_service
