"""
OMDb Client

Validation source: authoritative title, year, genre, plot and IMDb rating.
"""

from typing import Optional

import httpx

from ..config import PipelineConfig
from ..core.logging import get_logger

logger = get_logger(__name__)


OMDB_API_BASE = "https://www.omdbapi.com/"


class OMDbClient:
    """
    Title lookups against OMDb (``?t=<title>&y=<year>``).

    OMDb answers 200 even for misses, with ``{"Response": "False", "Error": ...}``.
    Misses are returned as-is so callers can read the error; transport
    failures return None.
    """

    def __init__(self, config: PipelineConfig, client: httpx.AsyncClient):
        self.config = config
        self.client = client

    async def lookup(
        self,
        title: str,
        year: Optional[int] = None,
        media_type: Optional[str] = "movie",
    ) -> Optional[dict]:
        params = {"t": title, "apikey": self.config.validation_api_key}
        if year:
            params["y"] = year
        if media_type:
            params["type"] = media_type

        try:
            response = await self.client.get(
                OMDB_API_BASE,
                params=params,
                timeout=self.config.http_timeout_seconds,
            )
            if response.status_code != 200:
                logger.warning("omdb_bad_status", title=title, status=response.status_code)
                return None

            data = response.json()
            return data if isinstance(data, dict) else None

        except (httpx.HTTPError, ValueError) as e:
            logger.warning("omdb_lookup_failed", title=title, error=str(e))
            return None

    async def find(self, title: str, year: Optional[int] = None, media_type: Optional[str] = "movie") -> Optional[dict]:
        """Like ``lookup`` but only returns successful matches."""
        data = await self.lookup(title, year, media_type)
        if not data or data.get("Response") != "True":
            return None
        return data
