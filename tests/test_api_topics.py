"""Tests for the /topics API endpoint.

Each test swaps ``app.state.catalog`` for a cache backed by ``tmp_path`` and an
``AsyncMock`` builder, so no crawl ever touches the network.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from quizbowl.api.app import create_app
from quizbowl.catalog import CatalogCache, CatalogStore
from quizbowl.scraper.models import CatalogSnapshot, Topic

_SNAPSHOT = CatalogSnapshot(
    categories=("Literature", "Science"),
    topics=(
        Topic(title="Operas", content="clue one\n\nclue two", category="Literature"),
        Topic(title="Chemical Elements", content="clue three", category="Science"),
    ),
)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def client() -> Generator[TestClient, None, None]:
    app = create_app()
    with TestClient(app, raise_server_exceptions=True) as c:
        yield c


def _install_cache(client: TestClient, store: CatalogStore, build: AsyncMock) -> CatalogCache:
    cache = CatalogCache(store, ttl=24 * 60 * 60, build=build)
    client.app.state.catalog = cache
    return cache


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------

class TestGetTopics:
    def test_miss_crawls_and_returns_catalog(self, client: TestClient, tmp_path: Path) -> None:
        store = CatalogStore(tmp_path / "cache.json")
        build = AsyncMock(return_value=_SNAPSHOT)
        _install_cache(client, store, build)

        resp = client.get("/topics")

        assert resp.status_code == 200
        assert resp.json() == {
            "categories": ["Literature", "Science"],
            "topics": [
                {"title": "Operas", "content": "clue one\n\nclue two", "category": "Literature"},
                {"title": "Chemical Elements", "content": "clue three", "category": "Science"},
            ],
        }
        assert store.exists()
        build.assert_awaited_once()

    def test_fresh_artifact_is_served_from_cache(self, client: TestClient, tmp_path: Path) -> None:
        store = CatalogStore(tmp_path / "cache.json")
        store.write(_SNAPSHOT)
        build = AsyncMock(return_value=CatalogSnapshot.empty())
        _install_cache(client, store, build)

        resp = client.get("/topics")

        assert resp.status_code == 200
        assert len(resp.json()["topics"]) == 2
        build.assert_not_awaited()

    def test_empty_catalog_is_still_200(self, client: TestClient, tmp_path: Path) -> None:
        store = CatalogStore(tmp_path / "cache.json")
        _install_cache(client, store, AsyncMock(return_value=CatalogSnapshot.empty()))

        resp = client.get("/topics")

        assert resp.status_code == 200
        assert resp.json() == {"categories": [], "topics": []}

    def test_artifact_write_failure_returns_500(self, client: TestClient, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = CatalogStore(blocker / "cache.json")
        _install_cache(client, store, AsyncMock(return_value=_SNAPSHOT))

        resp = client.get("/topics")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Failed to fetch topics"}

    def test_lifespan_attaches_cache(self, client: TestClient) -> None:
        assert isinstance(client.app.state.catalog, CatalogCache)
