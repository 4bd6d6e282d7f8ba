"""Scraper package — listing parse, clue extraction and batch crawling."""

from quizbowl.scraper.crawler import BatchCrawler, iter_batches
from quizbowl.scraper.extractor import extract_clues, scrape_topic_content
from quizbowl.scraper.listing import derive_title, fetch_listing, parse_listing
from quizbowl.scraper.models import CatalogSnapshot, Listing, Topic, TopicLink
from quizbowl.scraper.pipeline import scrape_catalog
from quizbowl.scraper.retry import RetryPolicy, with_retries

__all__ = [
    "BatchCrawler",
    "CatalogSnapshot",
    "Listing",
    "RetryPolicy",
    "Topic",
    "TopicLink",
    "derive_title",
    "extract_clues",
    "fetch_listing",
    "iter_batches",
    "parse_listing",
    "scrape_catalog",
    "scrape_topic_content",
    "with_retries",
]
