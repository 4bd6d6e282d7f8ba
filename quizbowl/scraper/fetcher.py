"""Async HTTP fetcher for the listing and topic pages."""

from __future__ import annotations

import httpx

# The origin sits behind Cloudflare, which rejects obvious bots; send the
# header set of a desktop Chrome navigation.
_BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/avif,image/webp,image/apng,*/*;q=0.8"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "DNT": "1",
    "Upgrade-Insecure-Requests": "1",
    "Sec-Fetch-Dest": "document",
    "Sec-Fetch-Mode": "navigate",
    "Sec-Fetch-Site": "none",
    "Cache-Control": "max-age=0",
}


def browser_headers(referer: str | None = None) -> dict[str, str]:
    """Return the request headers, optionally with a ``Referer``."""
    headers = dict(_BROWSER_HEADERS)
    if referer:
        headers["Referer"] = referer
    return headers


async def fetch_html(
    client: httpx.AsyncClient,
    url: str,
    *,
    timeout: float,
    referer: str | None = None,
) -> str:
    """GET *url* and return the response body as text.

    Raises:
        httpx.TimeoutException: If the request exceeds *timeout* seconds.
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
    """
    response = await client.get(
        url,
        headers=browser_headers(referer),
        timeout=timeout,
        follow_redirects=True,
    )
    response.raise_for_status()
    return response.text
