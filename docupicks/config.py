"""
Application Configuration

Load settings from environment variables with validation.
"""

from functools import lru_cache
from typing import List, Literal, Optional, Tuple
from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings

from .core.exceptions import ConfigurationError


DEFAULT_DOCUMENTARY_TERMS = "documentary,docu,non-fiction,true story,biography,investigative"

FallbackMode = Literal["below_limit", "empty"]


def split_csv(value: Optional[str]) -> List[str]:
    """Split a comma-separated env value, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class PipelineConfig(BaseModel):
    """
    Immutable configuration handed to every pipeline component.

    Built from Settings by ``Settings.pipeline_config()`` so components never
    read the environment themselves.
    """

    catalog_api_key: str
    validation_api_key: str
    topic_keywords: Tuple[str, ...] = ()
    documentary_terms: Tuple[str, ...] = tuple(split_csv(DEFAULT_DOCUMENTARY_TERMS))

    min_year: int = 2000
    max_year: int = 2025
    year_tolerance: int = 0

    result_limit: int = 40
    batch_size: int = 5
    inter_batch_delay_ms: int = 500
    max_pages: int = 1
    cache_ttl_seconds: int = 86400

    # "below_limit": fallback when fewer than result_limit validated
    # "empty": fallback only when nothing validated
    fallback_mode: FallbackMode = "below_limit"
    enrich_fallback: bool = True

    # Discovery filters
    genre_id: int = 99
    sort_by: str = "vote_average.desc"
    min_vote_count: int = 10
    min_vote_average: float = 6.0
    release_date_padding: int = 2
    region: str = "US"
    language: str = "en-US"

    http_timeout_seconds: float = 10.0

    model_config = ConfigDict(frozen=True)


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # Environment
    environment: str = "development"
    debug: bool = True

    # External APIs
    tmdb_api_key: Optional[str] = None
    omdb_api_key: Optional[str] = None

    # Comma-separated topics used to narrow discovery
    topic_keywords: str = ""

    # Redis
    redis_url: str = "redis://localhost:6379"
    cache_prefix: str = "DOCS"
    cache_ttl_seconds: int = 86400       # 24 hours
    stale_ttl_seconds: int = 604800      # 7 days

    # Pipeline
    min_year: int = 2000
    max_year: int = 2025
    year_tolerance: int = 0
    result_limit: int = 40
    batch_size: int = 5
    inter_batch_delay_ms: int = 500
    max_pages: int = 1
    documentary_terms: str = DEFAULT_DOCUMENTARY_TERMS
    fallback_mode: FallbackMode = "below_limit"
    enrich_fallback: bool = True

    # Discovery filters
    discover_sort_by: str = "vote_average.desc"
    discover_min_vote_count: int = 10
    discover_min_vote_average: float = 6.0
    watch_region: str = "US"

    http_timeout_seconds: float = 10.0

    # Rate Limiting
    rate_limit_per_minute: int = 60

    # Daily refresh (UTC)
    refresh_cron_hour: int = 0
    refresh_cron_minute: int = 5

    cors_origins: str = "*"

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def keyword_list(self) -> List[str]:
        return split_csv(self.topic_keywords)

    @property
    def cors_origin_list(self) -> List[str]:
        return split_csv(self.cors_origins) or ["*"]

    def pipeline_config(self) -> PipelineConfig:
        """
        Build the pipeline configuration.

        Raises:
            ConfigurationError if an API key or the topic keywords are missing
        """
        missing = [
            name for name, value in (
                ("TMDB_API_KEY", self.tmdb_api_key),
                ("OMDB_API_KEY", self.omdb_api_key),
                ("TOPIC_KEYWORDS", self.keyword_list),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            )

        return PipelineConfig(
            catalog_api_key=self.tmdb_api_key,
            validation_api_key=self.omdb_api_key,
            topic_keywords=tuple(self.keyword_list),
            documentary_terms=tuple(split_csv(self.documentary_terms)),
            min_year=self.min_year,
            max_year=self.max_year,
            year_tolerance=self.year_tolerance,
            result_limit=self.result_limit,
            batch_size=self.batch_size,
            inter_batch_delay_ms=self.inter_batch_delay_ms,
            max_pages=self.max_pages,
            cache_ttl_seconds=self.cache_ttl_seconds,
            fallback_mode=self.fallback_mode,
            enrich_fallback=self.enrich_fallback,
            sort_by=self.discover_sort_by,
            min_vote_count=self.discover_min_vote_count,
            min_vote_average=self.discover_min_vote_average,
            region=self.watch_region,
            http_timeout_seconds=self.http_timeout_seconds,
        )


@lru_cache()
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
