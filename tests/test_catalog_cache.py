"""Tests for the catalog store and its TTL cache.

The artifact lives under ``tmp_path``; its mtime is pinned with ``os.utime``
and the cache is handed a fake clock, so staleness is fully deterministic.
The crawl itself is replaced by an ``AsyncMock`` builder.
"""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from quizbowl.catalog import CatalogCache, CatalogStore
from quizbowl.config import Settings
from quizbowl.scraper.models import CatalogSnapshot, Topic

DAY = 24 * 60 * 60
WRITTEN_AT = 1_700_000_000.0


# ---------------------------------------------------------------------------
# Helpers / fixtures
# ---------------------------------------------------------------------------

def _snapshot(tag: str = "old") -> CatalogSnapshot:
    return CatalogSnapshot(
        categories=("Literature", "Science"),
        topics=(
            Topic(title=f"Operas {tag}", content="clue one\n\nclue two", category="Literature"),
            Topic(title=f"Elements {tag}", content="clue three", category="Science"),
        ),
    )


def _pin_mtime(path: Path, when: float = WRITTEN_AT) -> None:
    os.utime(path, (when, when))


class FakeClock:
    def __init__(self, now: float) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def store(tmp_path: Path) -> CatalogStore:
    return CatalogStore(tmp_path / "naqt_topics_cache.json")


# ---------------------------------------------------------------------------
# CatalogStore
# ---------------------------------------------------------------------------

class TestCatalogStore:
    def test_missing_artifact(self, store: CatalogStore) -> None:
        assert store.exists() is False
        assert store.mtime() is None

    def test_write_then_read(self, store: CatalogStore) -> None:
        store.write(_snapshot())
        assert store.read() == _snapshot()

    def test_artifact_shape(self, store: CatalogStore) -> None:
        store.write(_snapshot())
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["categories"] == ["Literature", "Science"]
        assert data["topics"][0] == {
            "title": "Operas old",
            "content": "clue one\n\nclue two",
            "category": "Literature",
        }

    def test_write_creates_parent_directory(self, tmp_path: Path) -> None:
        store = CatalogStore(tmp_path / "nested" / "dir" / "cache.json")
        store.write(_snapshot())
        assert store.exists()

    def test_write_replaces_previous_snapshot(self, store: CatalogStore) -> None:
        store.write(_snapshot("old"))
        store.write(_snapshot("new"))
        assert store.read().topics[0].title == "Operas new"
        assert not store.path.with_name(store.path.name + ".tmp").exists()

    def test_failed_write_leaves_no_temp_file(
        self, store: CatalogStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("quizbowl.catalog.store.os.replace", broken_replace)
        with pytest.raises(OSError):
            store.write(_snapshot())

        assert not store.path.with_name(store.path.name + ".tmp").exists()
        assert not store.exists()

    def test_corrupt_artifact_raises_value_error(self, store: CatalogStore) -> None:
        store.path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError):
            store.read()

    def test_wrong_shape_raises_value_error(self, store: CatalogStore) -> None:
        store.path.write_text(json.dumps({"topics": [{"title": "x"}], "categories": []}))
        with pytest.raises(ValueError):
            store.read()


# ---------------------------------------------------------------------------
# CatalogCache
# ---------------------------------------------------------------------------

class TestCatalogCache:
    def _cache(self, store: CatalogStore, now: float, build: AsyncMock) -> CatalogCache:
        return CatalogCache(store, ttl=DAY, build=build, clock=FakeClock(now))

    async def test_fresh_artifact_is_served_without_crawling(self, store: CatalogStore) -> None:
        store.write(_snapshot())
        _pin_mtime(store.path)
        build = AsyncMock(return_value=_snapshot("new"))
        cache = self._cache(store, WRITTEN_AT + DAY - 1, build)

        assert await cache.get() == _snapshot()
        build.assert_not_awaited()

    async def test_stale_artifact_triggers_crawl(self, store: CatalogStore) -> None:
        store.write(_snapshot())
        _pin_mtime(store.path)
        build = AsyncMock(return_value=_snapshot("new"))
        cache = self._cache(store, WRITTEN_AT + DAY, build)

        result = await cache.get()

        assert result == _snapshot("new")
        build.assert_awaited_once()
        assert store.read() == _snapshot("new")

    async def test_missing_artifact_triggers_crawl_and_persists(self, store: CatalogStore) -> None:
        build = AsyncMock(return_value=_snapshot())
        cache = CatalogCache(store, ttl=DAY, build=build)

        assert await cache.get() == _snapshot()
        assert store.read() == _snapshot()
        build.assert_awaited_once()

    async def test_corrupt_artifact_is_a_miss(self, store: CatalogStore) -> None:
        store.path.write_text("garbage", encoding="utf-8")
        _pin_mtime(store.path)
        build = AsyncMock(return_value=_snapshot())
        cache = self._cache(store, WRITTEN_AT + 10, build)

        assert await cache.get() == _snapshot()
        build.assert_awaited_once()

    async def test_write_then_read_round_trip(self, store: CatalogStore) -> None:
        build = AsyncMock(return_value=_snapshot())
        cache = CatalogCache(store, ttl=DAY, build=build)

        written = await cache.get()
        read_back = await cache.get()

        assert read_back == written
        build.assert_awaited_once()

    async def test_write_failure_propagates(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        store = CatalogStore(blocker / "cache.json")
        cache = CatalogCache(store, ttl=DAY, build=AsyncMock(return_value=_snapshot()))

        with pytest.raises(OSError):
            await cache.get()

    async def test_concurrent_misses_share_one_crawl(self, store: CatalogStore) -> None:
        async def slow_build() -> CatalogSnapshot:
            await asyncio.sleep(0.01)
            return _snapshot()

        build = AsyncMock(side_effect=slow_build)
        cache = CatalogCache(store, ttl=DAY, build=build)

        results = await asyncio.gather(cache.get(), cache.get(), cache.get())

        assert all(r == _snapshot() for r in results)
        build.assert_awaited_once()

    async def test_refresh_ignores_freshness(self, store: CatalogStore) -> None:
        store.write(_snapshot())
        _pin_mtime(store.path)
        build = AsyncMock(return_value=_snapshot("new"))
        cache = self._cache(store, WRITTEN_AT + 1, build)

        assert await cache.refresh() == _snapshot("new")
        build.assert_awaited_once()

    def test_status(self, store: CatalogStore) -> None:
        cache = self._cache(store, WRITTEN_AT + 3600, AsyncMock())
        assert cache.status().exists is False
        assert cache.status().fresh is False

        store.write(_snapshot())
        _pin_mtime(store.path)
        status = cache.status()
        assert status.exists is True
        assert status.age_seconds == pytest.approx(3600)
        assert status.fresh is True

    def test_status_ignores_directory_at_artifact_path(self, store: CatalogStore) -> None:
        store.path.mkdir()
        cache = self._cache(store, WRITTEN_AT, AsyncMock())

        status = cache.status()
        assert status.exists is False
        assert status.age_seconds is None
        assert status.fresh is False

    def test_from_settings_uses_configured_path_and_ttl(self, tmp_path: Path) -> None:
        settings = Settings(workspace_dir=tmp_path, cache_ttl_hours=2)
        cache = CatalogCache.from_settings(settings)
        assert cache.store.path == tmp_path / "naqt_topics_cache.json"
        assert cache.ttl == 2 * 60 * 60
