"""
Pytest Fixtures

Shared configs, factories and fake upstreams for testing.
"""

from contextlib import asynccontextmanager
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock

import httpx
import pytest

from docupicks.config import PipelineConfig, Settings
from docupicks.models.movie import CandidateItem, ValidatedItem, StreamingProvider


@pytest.fixture
def pipeline_config() -> PipelineConfig:
    """Small, fast pipeline configuration."""
    return PipelineConfig(
        catalog_api_key="tmdb-key",
        validation_api_key="omdb-key",
        topic_keywords=("police", "civil rights"),
        min_year=2000,
        max_year=2025,
        result_limit=3,
        batch_size=2,
        inter_batch_delay_ms=0,
        max_pages=2,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        tmdb_api_key="tmdb-key",
        omdb_api_key="omdb-key",
        topic_keywords="police,civil rights",
        redis_url="",
        result_limit=3,
        inter_batch_delay_ms=0,
    )


def make_candidate(tmdb_id: int, title: str, release_date: str = "2020-01-10", overview: str = "") -> CandidateItem:
    return CandidateItem(id=tmdb_id, title=title, release_date=release_date, overview=overview)


def make_validated(title: str, rating: str, imdb_id: Optional[str] = None) -> ValidatedItem:
    return ValidatedItem(
        Title=title,
        Year="2020",
        Genre="Documentary",
        imdbRating=rating,
        imdbID=imdb_id or f"tt-{title.lower().replace(' ', '-')}",
    )


def omdb_record(title: str, year: str = "2020", genre: str = "Documentary", rating: str = "7.5", **extra) -> Dict[str, Any]:
    record = {
        "Response": "True",
        "Title": title,
        "Year": year,
        "Genre": genre,
        "Plot": "",
        "imdbRating": rating,
        "Poster": "https://img.example/poster.jpg",
        "Director": "Jane Doe",
        "Runtime": "90 min",
        "Rated": "PG-13",
        "imdbID": f"tt-{title.lower().replace(' ', '-')}",
        "Ratings": [{"Source": "Internet Movie Database", "Value": f"{rating}/10"}],
    }
    record.update(extra)
    return record


OMDB_MISS = {"Response": "False", "Error": "Movie not found!"}


@pytest.fixture
def candidate_factory() -> Callable[..., CandidateItem]:
    return make_candidate


@pytest.fixture
def validated_factory() -> Callable[..., ValidatedItem]:
    return make_validated


@pytest.fixture
def fake_omdb():
    """OMDb client double keyed by title."""
    records: Dict[str, Dict[str, Any]] = {}

    async def find(title, year=None, media_type="movie"):
        return records.get(title)

    async def lookup(title, year=None, media_type="movie"):
        return records.get(title, OMDB_MISS)

    client = AsyncMock()
    client.records = records
    client.find = AsyncMock(side_effect=find)
    client.lookup = AsyncMock(side_effect=lookup)
    return client


@pytest.fixture
def fake_tmdb():
    """TMDB client double with one provider per movie."""
    client = AsyncMock()
    client.get_watch_providers = AsyncMock(
        return_value=[StreamingProvider(id=8, name="Netflix", logo_path="/n.png")]
    )
    client.search_movie_id = AsyncMock(return_value=4242)
    client.find_by_imdb_id = AsyncMock(return_value=4242)
    return client


def mock_http_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient whose requests are answered by ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def fake_pipeline_factory(results: List[ValidatedItem] = None, error: Exception = None):
    """Stand-in for ``DocumentaryPipeline.open`` that records runs."""
    pipeline = AsyncMock()
    if error is not None:
        pipeline.run = AsyncMock(side_effect=error)
    else:
        pipeline.run = AsyncMock(return_value=list(results or []))

    @asynccontextmanager
    async def factory(config):
        yield pipeline

    factory.pipeline = pipeline
    return factory
