"""Batch crawler: scrapes topic pages a few at a time.

Each batch of links is fetched concurrently and joined before the next batch
starts, with a fixed pause in between.  That keeps the request rate against
the origin bounded while still overlapping the I/O within a batch.
"""

from __future__ import annotations

import asyncio
import random
from typing import Iterator, Sequence, TypeVar

import httpx

from quizbowl.config import Settings
from quizbowl.scraper.extractor import scrape_topic_content
from quizbowl.scraper.models import Topic, TopicLink
from quizbowl.scraper.retry import RetryPolicy, Sleep, with_retries

T = TypeVar("T")


def iter_batches(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Yield consecutive slices of *items* holding at most *size* elements."""
    if size < 1:
        raise ValueError("batch size must be at least 1")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


class BatchCrawler:
    """Turn :class:`TopicLink` records into :class:`Topic` records.

    Links whose page yields no clues (after retries) are dropped; they never
    abort the batch or the run.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        settings: Settings,
        *,
        policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
        rng: random.Random | None = None,
    ) -> None:
        self._client = client
        self._settings = settings
        self._policy = policy or RetryPolicy.from_settings(settings)
        self._sleep = sleep
        self._rng = rng or random.Random()

    async def fetch_content(self, link: TopicLink) -> str:
        """Scrape one topic page with retries; ``""`` when nothing was found."""
        return await with_retries(
            lambda: scrape_topic_content(self._client, link.url, self._settings),
            default="",
            policy=self._policy,
            label=link.url,
            sleep=self._sleep,
            rng=self._rng,
        )

    async def _crawl_batch(self, batch: list[TopicLink]) -> list[Topic]:
        results = await asyncio.gather(
            *(self.fetch_content(link) for link in batch),
            return_exceptions=True,
        )
        topics: list[Topic] = []
        for link, result in zip(batch, results):
            if isinstance(result, BaseException):
                print(f"[CRAWL] ✗ {link.title!r} raised {result!r:.120}; skipped.")
            elif not result:
                print(f"[CRAWL] ✗ {link.title!r}: no clues found; skipped.")
            else:
                topics.append(Topic(title=link.title, content=result, category=link.category))
        return topics

    async def crawl(self, links: Sequence[TopicLink]) -> list[Topic]:
        """Scrape every link in batches and return the topics that had clues."""
        size = self._settings.batch_size
        batches = list(iter_batches(links, size))
        topics: list[Topic] = []

        for index, batch in enumerate(batches, start=1):
            print(f"[CRAWL] Batch {index}/{len(batches)} ({len(batch)} topic(s)) …")
            topics.extend(await self._crawl_batch(batch))
            if index < len(batches):
                await self._sleep(self._settings.batch_delay)

        print(f"[CRAWL] {len(topics)}/{len(links)} topic(s) had usable clues.")
        return topics
