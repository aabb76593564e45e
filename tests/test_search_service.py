"""
Tests for documentary title search
"""

import pytest
from contextlib import asynccontextmanager
from unittest.mock import MagicMock, patch

from docupicks.core.exceptions import NotFoundError, UpstreamError
from docupicks.services.search_service import SearchService

from conftest import omdb_record


@pytest.fixture
def service(settings, fake_omdb, fake_tmdb):
    pipeline = MagicMock()
    pipeline.omdb = fake_omdb
    pipeline.tmdb = fake_tmdb

    @asynccontextmanager
    async def factory(config):
        yield pipeline

    with patch("docupicks.services.search_service.get_settings", return_value=settings):
        yield SearchService(pipeline_factory=factory)


@pytest.mark.asyncio
async def test_documentary_enriched_via_imdb_id(service, fake_omdb, fake_tmdb):
    fake_omdb.records["Strong Island"] = omdb_record("Strong Island", year="2017", rating="7.4")

    item = await service.search("  Strong Island ")

    assert item.title == "Strong Island"
    assert item.tmdb_id == 4242
    assert [p.name for p in item.watch_providers] == ["Netflix"]
    fake_omdb.lookup.assert_awaited_with("Strong Island", media_type=None)
    fake_tmdb.find_by_imdb_id.assert_awaited_with("tt-strong-island")


@pytest.mark.asyncio
async def test_no_match_uses_omdb_error(service):
    with pytest.raises(NotFoundError) as exc:
        await service.search("Nothing Here")

    assert exc.value.status_code == 404
    assert "Movie not found!" in exc.value.message


@pytest.mark.asyncio
async def test_non_documentary_rejected(service, fake_omdb, fake_tmdb):
    fake_omdb.records["Heat"] = omdb_record("Heat", genre="Action, Crime")

    with pytest.raises(NotFoundError) as exc:
        await service.search("Heat")

    assert "Not a documentary" in exc.value.message
    fake_tmdb.find_by_imdb_id.assert_not_awaited()


@pytest.mark.asyncio
async def test_omdb_outage_is_upstream_error(service, fake_omdb):
    fake_omdb.lookup.side_effect = None
    fake_omdb.lookup.return_value = None

    with pytest.raises(UpstreamError) as exc:
        await service.search("Strong Island")

    assert exc.value.status_code == 502
