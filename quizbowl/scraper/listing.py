"""Listing page parser: categories and the topic links filed under them.

The by-category page is a flat sequence of ``<h2>`` category headings, each
followed by a ``<ul>`` of topic anchors.  Walking the headings and anchors in
document order with a "current category" cursor reproduces the grouping.
"""

from __future__ import annotations

import re
from urllib.parse import urljoin

import httpx

from quizbowl.config import Settings
from quizbowl.scraper.document import Anchor, Heading, parse_document
from quizbowl.scraper.fetcher import fetch_html
from quizbowl.scraper.models import Listing, TopicLink

_TOPIC_HREF = re.compile(r"/you-gotta-know/.*\.html")
_YGK_PREFIX = re.compile(r"You Gotta Know(?:…|\.\.\.)these (.+)", re.IGNORECASE)
_WORD = re.compile(r"\w\S*")


def title_case(text: str) -> str:
    """Upper-case the first letter of every word and lower-case the rest.

    Unlike :meth:`str.title`, apostrophes do not start a new word
    (``"don't"`` → ``"Don't"``).
    """
    return _WORD.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), text)


def derive_title(text: str) -> str:
    """Turn anchor text into a topic title.

    ``"You Gotta Know…these Operas"`` becomes ``"Operas"``; any other text is
    used as-is.  Both are title-cased.
    """
    match = _YGK_PREFIX.search(text)
    return title_case(match.group(1) if match else text)


def parse_listing(html: str, *, base_url: str, excluded_category: str) -> Listing:
    """Parse the listing page into ordered categories and topic links.

    A heading equal to *excluded_category* is not a subject area; it clears
    the cursor so the anchors below it are skipped until the next heading.
    They are never filed under the preceding category.
    """
    categories: list[str] = []
    links: list[TopicLink] = []
    current: str | None = None

    for node in parse_document(html):
        if isinstance(node, Heading):
            if not node.text:
                continue
            if node.text == excluded_category:
                current = None
                continue
            current = node.text
            if current not in categories:
                categories.append(current)
        elif isinstance(node, Anchor) and current:
            if not node.href or not _TOPIC_HREF.search(node.href):
                continue
            title = derive_title(node.text)
            if title:
                links.append(
                    TopicLink(title=title, url=urljoin(base_url, node.href), category=current)
                )

    return Listing(categories=categories, links=links)


async def fetch_listing(client: httpx.AsyncClient, settings: Settings) -> Listing:
    """Download and parse the by-category listing page.

    Raises:
        httpx.HTTPError: On a network failure or non-2xx response.
    """
    html = await fetch_html(client, settings.listing_url, timeout=settings.listing_timeout)
    listing = parse_listing(
        html,
        base_url=settings.base_url,
        excluded_category=settings.excluded_category,
    )
    print(
        f"[LISTING] Found {len(listing.links)} topic(s) across "
        f"{len(listing.categories)} categories."
    )
    return listing
