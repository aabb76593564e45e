"""
Tests for candidate discovery
"""

import pytest
from unittest.mock import AsyncMock

from docupicks.services.discovery import DiscoveryService, dedupe_by_title

from conftest import make_candidate


@pytest.fixture
def tmdb():
    client = AsyncMock()
    client.resolve_keyword_ids = AsyncMock(return_value=[12, None, 34])
    return client


@pytest.mark.asyncio
async def test_keyword_filter_joins_resolved_ids(pipeline_config, tmdb):
    service = DiscoveryService(pipeline_config, tmdb)

    assert await service.keyword_filter() == "12|34"
    tmdb.resolve_keyword_ids.assert_awaited_with(["police", "civil rights"])


@pytest.mark.asyncio
async def test_candidates_within_year_window(pipeline_config, tmdb):
    tmdb.discover = AsyncMock(side_effect=[
        [
            make_candidate(1, "Too Old", "1999-12-31"),
            make_candidate(2, "In Range", "2000-01-01"),
            make_candidate(3, "Future", "2026-01-01"),
            make_candidate(4, "No Date", ""),
        ],
        [make_candidate(5, "Also In Range", "2025-12-31")],
    ])

    candidates = await DiscoveryService(pipeline_config, tmdb).collect("12")

    assert [c.title for c in candidates] == ["In Range", "Also In Range"]
    for c in candidates:
        assert pipeline_config.min_year <= c.release_year <= pipeline_config.max_year
    tmdb.discover.assert_any_await(1, "12")
    tmdb.discover.assert_any_await(2, "12")


@pytest.mark.asyncio
async def test_titles_deduplicated_across_pages(pipeline_config, tmdb):
    tmdb.discover = AsyncMock(side_effect=[
        [make_candidate(1, "The Seven Five")],
        [make_candidate(2, "  the seven  FIVE "), make_candidate(3, "Peace Officer")],
    ])

    candidates = await DiscoveryService(pipeline_config, tmdb).collect()

    assert [c.tmdb_id for c in candidates] == [1, 3]


@pytest.mark.asyncio
async def test_stops_once_limit_reached(pipeline_config, tmdb):
    tmdb.discover = AsyncMock(return_value=[make_candidate(i, f"Doc {i}") for i in range(5)])

    candidates = await DiscoveryService(pipeline_config, tmdb).collect()

    assert len(candidates) == 5
    assert tmdb.discover.await_count == 1


@pytest.mark.asyncio
async def test_bounded_by_max_pages(pipeline_config, tmdb):
    tmdb.discover = AsyncMock(return_value=[])

    assert await DiscoveryService(pipeline_config, tmdb).collect() == []
    assert tmdb.discover.await_count == pipeline_config.max_pages


def test_dedupe_by_title_case_and_whitespace():
    items = [make_candidate(1, "LA 92"), make_candidate(2, " la  92"), make_candidate(3, "")]
    assert [c.tmdb_id for c in dedupe_by_title(items)] == [1]
