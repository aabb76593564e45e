"""
TMDB Client

Catalog source for the documentary pipeline:
- /discover/movie        candidate discovery
- /search/keyword        topic keyword resolution
- /movie/{id}/watch/providers  streaming availability
- /search/movie, /find/{imdb_id}  title and external-id lookups

Every method degrades to an empty/None result on transport or API errors.
Callers never see an exception from this module.
"""

import asyncio
from typing import List, Optional, Sequence

import httpx

from ..config import PipelineConfig
from ..core.logging import get_logger
from ..models.movie import CandidateItem, StreamingProvider

logger = get_logger(__name__)


TMDB_API_BASE = "https://api.themoviedb.org/3"


def build_keyword_filter(keyword_ids: Sequence[Optional[int]]) -> Optional[str]:
    """Join resolved keyword IDs into a TMDB OR-filter ("12|34")."""
    resolved = [str(kid) for kid in keyword_ids if kid is not None]
    return "|".join(resolved) if resolved else None


class TMDBClient:
    """
    Thin async wrapper around the TMDB v3 API.

    Shares one httpx.AsyncClient per pipeline run.
    """

    def __init__(self, config: PipelineConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    async def _get(self, path: str, params: Optional[dict] = None) -> Optional[dict]:
        """GET a TMDB endpoint; None on any failure."""
        query = {"api_key": self.config.catalog_api_key}
        if params:
            query.update(params)

        try:
            response = await self.client.get(
                f"{TMDB_API_BASE}{path}",
                params=query,
                timeout=self.config.http_timeout_seconds,
            )
            if response.status_code != 200:
                logger.warning("tmdb_bad_status", path=path, status=response.status_code)
                return None

            data = response.json()
            if not isinstance(data, dict):
                logger.warning("tmdb_malformed_body", path=path)
                return None
            return data

        except (httpx.HTTPError, ValueError) as e:
            logger.warning("tmdb_request_failed", path=path, error=str(e))
            return None

    # =========================================================================
    # DISCOVERY
    # =========================================================================

    def discover_params(self, page: int, keyword_filter: Optional[str] = None) -> dict:
        """Fixed documentary filters for /discover/movie."""
        cfg = self.config
        params = {
            "with_genres": cfg.genre_id,
            "sort_by": cfg.sort_by,
            "vote_count.gte": cfg.min_vote_count,
            "vote_average.gte": cfg.min_vote_average,
            "primary_release_date.gte": f"{cfg.min_year - cfg.release_date_padding}-01-01",
            "primary_release_date.lte": f"{cfg.max_year}-12-31",
            "watch_region": cfg.region,
            "include_adult": "false",
            "page": page,
            "language": cfg.language,
            "region": cfg.region,
        }
        if keyword_filter:
            params["with_keywords"] = keyword_filter
        return params

    async def discover(self, page: int, keyword_filter: Optional[str] = None) -> List[CandidateItem]:
        """
        Fetch one page of documentary candidates.

        Returns:
            Candidates in TMDB order, or [] on failure
        """
        data = await self._get("/discover/movie", self.discover_params(page, keyword_filter))
        if data is None:
            return []

        candidates: List[CandidateItem] = []
        for raw in data.get("results") or []:
            try:
                candidates.append(CandidateItem.model_validate(raw))
            except ValueError as e:
                logger.debug("tmdb_candidate_skipped", error=str(e))

        logger.debug("tmdb_discover_page", page=page, count=len(candidates))
        return candidates

    # =========================================================================
    # KEYWORDS
    # =========================================================================

    async def get_keyword_id(self, keyword: str) -> Optional[int]:
        """First matching keyword ID, or None."""
        data = await self._get("/search/keyword", {"query": keyword})
        if not data:
            return None

        results = data.get("results") or []
        if not results:
            logger.debug("tmdb_keyword_not_found", keyword=keyword)
            return None
        return results[0].get("id")

    async def resolve_keyword_ids(self, keywords: Sequence[str]) -> List[Optional[int]]:
        """
        Resolve all topic keywords concurrently.

        Order matches ``keywords``; unresolved entries are None.
        """
        if not keywords:
            return []
        ids = await asyncio.gather(*(self.get_keyword_id(k) for k in keywords))
        logger.info(
            "tmdb_keywords_resolved",
            requested=len(keywords),
            resolved=sum(1 for i in ids if i is not None),
        )
        return list(ids)

    # =========================================================================
    # PROVIDERS & LOOKUPS
    # =========================================================================

    async def get_watch_providers(self, tmdb_id: int) -> List[StreamingProvider]:
        """Flat-rate providers for the configured region."""
        data = await self._get(f"/movie/{tmdb_id}/watch/providers")
        if not data:
            return []

        region = (data.get("results") or {}).get(self.config.region) or {}
        providers = []
        for raw in region.get("flatrate") or []:
            try:
                providers.append(StreamingProvider.from_tmdb(raw))
            except (KeyError, ValueError):
                continue
        return providers

    async def search_movie_id(self, title: str, year: Optional[int] = None) -> Optional[int]:
        """TMDB ID of the best title/year match."""
        params = {"query": title, "include_adult": "false", "language": self.config.language}
        if year:
            params["year"] = year

        data = await self._get("/search/movie", params)
        results = (data or {}).get("results") or []
        return results[0].get("id") if results else None

    async def find_by_imdb_id(self, imdb_id: str) -> Optional[int]:
        """TMDB movie ID for an IMDb ID."""
        data = await self._get(f"/find/{imdb_id}", {"external_source": "imdb_id"})
        results = (data or {}).get("movie_results") or []
        return results[0].get("id") if results else None
