"""TTL cache in front of the full catalog crawl.

A crawl takes minutes and hammers the origin, so :class:`CatalogCache` serves
the persisted artifact while it is younger than the TTL.  Freshness is judged
purely on ``now - mtime`` of the artifact.  A missing, unreadable or stale
artifact is a miss: the crawl runs, the result overwrites the artifact and is
returned.

Concurrent misses on one cache instance share a single crawl: callers queue
on an :class:`asyncio.Lock` and re-check freshness once they hold it.
A failure to *write* the artifact propagates to the caller.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable

from quizbowl.catalog.store import CatalogStore
from quizbowl.config import Settings
from quizbowl.scraper.models import CatalogSnapshot
from quizbowl.scraper.pipeline import scrape_catalog

Builder = Callable[[], Awaitable[CatalogSnapshot]]
Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheStatus:
    path: Path
    exists: bool
    age_seconds: float | None
    fresh: bool


class CatalogCache:
    def __init__(
        self,
        store: CatalogStore,
        *,
        ttl: float,
        build: Builder,
        clock: Clock = time.time,
    ) -> None:
        self.store = store
        self.ttl = ttl
        self._build = build
        self._clock = clock
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(cls, settings: Settings) -> CatalogCache:
        """Cache wired to ``settings.cache_path`` that crawls with :func:`scrape_catalog`."""
        return cls(
            CatalogStore(settings.cache_path),
            ttl=settings.cache_ttl,
            build=lambda: scrape_catalog(settings),
        )

    # ------------------------------------------------------------------
    # Freshness
    # ------------------------------------------------------------------
    def age(self) -> float | None:
        """Seconds since the artifact was written, ``None`` if there is none."""
        mtime = self.store.mtime()
        if mtime is None:
            return None
        return self._clock() - mtime

    def is_fresh(self) -> bool:
        age = self.age()
        return age is not None and age < self.ttl

    def status(self) -> CacheStatus:
        exists = self.store.exists()
        age = self.age() if exists else None
        return CacheStatus(
            path=self.store.path,
            exists=exists,
            age_seconds=age,
            fresh=age is not None and age < self.ttl,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def _load_fresh(self) -> CatalogSnapshot | None:
        if not self.is_fresh():
            return None
        try:
            return self.store.read()
        except (OSError, ValueError) as exc:
            print(f"[CACHE] Unreadable artifact {self.store.path}: {exc!r:.120}")
            return None

    async def get(self) -> CatalogSnapshot:
        """Return the cached catalog, crawling first if it is absent or stale."""
        snapshot = self._load_fresh()
        if snapshot is not None:
            return snapshot

        async with self._lock:
            # Another caller may have finished a crawl while we waited.
            snapshot = self._load_fresh()
            if snapshot is not None:
                return snapshot
            print("[CACHE] Miss, running a full crawl …")
            return await self._rebuild()

    async def refresh(self) -> CatalogSnapshot:
        """Crawl and overwrite the artifact regardless of its age."""
        async with self._lock:
            return await self._rebuild()

    async def _rebuild(self) -> CatalogSnapshot:
        snapshot = await self._build()
        self.store.write(snapshot)
        print(
            f"[CACHE] Stored {len(snapshot.topics)} topic(s) across "
            f"{len(snapshot.categories)} categories at {self.store.path}"
        )
        return snapshot
