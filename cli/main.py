"""Quiz topic catalog CLI — entry-point for crawler and cache operations.

Usage:
    python cli/main.py --help

Commands:
    topics generate   → force a fresh crawl and overwrite the artifact
    topics status     → show where the artifact lives and whether it is fresh
    topics show       → print the catalog (crawls first on a cache miss)
    scrape            → extract the clues of a single topic page
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from quizbowl.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
from typing import Optional

import httpx
import typer

from quizbowl.catalog import CatalogCache
from quizbowl.config import settings

app = typer.Typer(
    name="quizbowl",
    help="Quiz topic catalog CLI.",
    no_args_is_help=True,
)

# ---------------------------------------------------------------------------
# Catalog commands
# ---------------------------------------------------------------------------
topics_app = typer.Typer(help="Topic catalog operations.", no_args_is_help=True)
app.add_typer(topics_app, name="topics")


def _format_age(seconds: float) -> str:
    hours, rem = divmod(int(seconds), 3600)
    return f"{hours}h {rem // 60:02d}m"


@topics_app.command("generate")
def topics_generate() -> None:
    """Crawl the origin now and overwrite the cached catalog."""
    cache = CatalogCache.from_settings(settings)
    typer.echo(f"[topics generate] Scraping {settings.listing_url} …")
    try:
        snapshot = asyncio.run(cache.refresh())
    except OSError as exc:
        typer.echo(f"[topics generate] ✗ Could not write {cache.store.path}: {exc}")
        raise typer.Exit(1)
    typer.echo(
        f"[topics generate] ✓ Generated {len(snapshot.topics)} topic(s) across "
        f"{len(snapshot.categories)} categories → {cache.store.path}"
    )


@topics_app.command("status")
def topics_status() -> None:
    """Show the cached catalog's path, age, and freshness."""
    cache = CatalogCache.from_settings(settings)
    status = cache.status()
    typer.echo(f"[topics status] Path  : {status.path}")
    if not status.exists:
        typer.echo("[topics status] No cached catalog yet.")
        return
    typer.echo(f"[topics status] Age   : {_format_age(status.age_seconds or 0.0)}")
    typer.echo(f"[topics status] Fresh : {'yes' if status.fresh else 'no (will re-crawl)'}")


@topics_app.command("show")
def topics_show(
    category: Optional[str] = typer.Option(None, help="Only list this category."),
) -> None:
    """Print categories and their topic titles, crawling first if stale."""
    cache = CatalogCache.from_settings(settings)
    try:
        snapshot = asyncio.run(cache.get())
    except OSError as exc:
        typer.echo(f"[topics show] ✗ Catalog unavailable: {exc}")
        raise typer.Exit(1)

    names = [c for c in snapshot.categories if category is None or c == category]
    if not names:
        typer.echo("[topics show] No topics found.")
        return
    for name in names:
        topics = snapshot.topics_in(name)
        typer.echo(f"{name} ({len(topics)})")
        for topic in topics:
            typer.echo(f"  - {topic.title}  [{len(topic.clues())} clue(s)]")


# ---------------------------------------------------------------------------
# Single-page scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Option(..., help="Topic page URL to scrape."),
) -> None:
    """Extract the clues of one topic page and print them to stdout."""
    from quizbowl.scraper import BatchCrawler, TopicLink
    from quizbowl.scraper.models import CLUE_SEPARATOR

    async def _run() -> str:
        async with httpx.AsyncClient() as client:
            crawler = BatchCrawler(client, settings)
            return await crawler.fetch_content(TopicLink(title=url, url=url, category=""))

    typer.echo(f"[scrape] Fetching {url!r} …")
    content = asyncio.run(_run())
    if not content:
        typer.echo("[scrape] No qualifying clues found.")
        raise typer.Exit(1)

    clues = content.split(CLUE_SEPARATOR)
    typer.echo(f"[scrape] Clues : {len(clues)}")
    typer.echo("")
    typer.echo(content)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
