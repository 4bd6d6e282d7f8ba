"""Clue extraction: turns a topic detail page into its list of clue strings."""

from __future__ import annotations

import re

import httpx

from quizbowl.config import Settings
from quizbowl.scraper.document import ListItem, parse_document
from quizbowl.scraper.fetcher import fetch_html
from quizbowl.scraper.models import CLUE_SEPARATOR

_SPACE_BEFORE_PUNCT = re.compile(r"\s+([.,;:!?)])")
_WHITESPACE = re.compile(r"\s+")


def clean_text(text: str) -> str:
    """Collapse whitespace runs and drop whitespace in front of punctuation."""
    text = _SPACE_BEFORE_PUNCT.sub(r"\1", text)
    text = _WHITESPACE.sub(" ", text)
    return text.strip()


def extract_clues(html: str, *, min_length: int = 100, marker: str = "label") -> list[str]:
    """Return the clue entries of a detail page in document order.

    A list item counts as a clue only when its cleaned text is longer than
    *min_length* characters **and** its inner markup contains *marker* (the
    CSS class the origin uses to tag clue entries).  Short items and
    navigation lists are skipped.
    """
    clues: list[str] = []
    for node in parse_document(html):
        if not isinstance(node, ListItem):
            continue
        text = clean_text(node.text)
        if len(text) > min_length and marker in node.markup:
            clues.append(text)
    return clues


def join_clues(clues: list[str]) -> str:
    return CLUE_SEPARATOR.join(clues)


async def scrape_topic_content(
    client: httpx.AsyncClient,
    url: str,
    settings: Settings,
) -> str:
    """Fetch one topic page and return its clues joined into topic content.

    An empty string means no qualifying clue was found.
    """
    html = await fetch_html(
        client,
        url,
        timeout=settings.detail_timeout,
        referer=settings.listing_url,
    )
    clues = extract_clues(
        html,
        min_length=settings.min_clue_length,
        marker=settings.clue_marker,
    )
    return join_clues(clues)
