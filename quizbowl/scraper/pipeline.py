"""End-to-end crawl: listing page → topic pages → :class:`CatalogSnapshot`."""

from __future__ import annotations

import httpx

from quizbowl.config import Settings, settings as default_settings
from quizbowl.scraper.crawler import BatchCrawler
from quizbowl.scraper.listing import fetch_listing
from quizbowl.scraper.models import CatalogSnapshot


async def scrape_catalog(
    settings: Settings | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    crawler: BatchCrawler | None = None,
) -> CatalogSnapshot:
    """Crawl the origin and return a fresh catalog.

    A failure while fetching or parsing the listing page degrades to an empty
    catalog rather than raising; individual topic failures are absorbed by
    the crawler.
    """
    settings = settings or default_settings
    if client is None:
        async with httpx.AsyncClient() as owned:
            return await scrape_catalog(settings, client=owned, crawler=crawler)

    try:
        listing = await fetch_listing(client, settings)
    except Exception as exc:
        print(f"[LISTING] ✗ Could not load {settings.listing_url}: {exc!r:.120}")
        return CatalogSnapshot.empty()

    crawler = crawler or BatchCrawler(client, settings)
    topics = await crawler.crawl(listing.links)
    return CatalogSnapshot(categories=tuple(listing.categories), topics=tuple(topics))
