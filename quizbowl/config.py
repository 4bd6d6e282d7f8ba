"""Centralised settings for the quiz topic catalog.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Workspace / storage
    # ------------------------------------------------------------------
    workspace_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("QUIZBOWL_WORKSPACE", Path.home() / ".quizbowl_data")
        )
    )
    cache_ttl_hours: float = field(
        default_factory=lambda: float(os.environ.get("CACHE_TTL_HOURS", "24"))
    )

    @property
    def cache_path(self) -> Path:
        """Absolute path to the persisted catalog artifact."""
        return self.workspace_dir / "naqt_topics_cache.json"

    @property
    def cache_ttl(self) -> float:
        """Maximum artifact age in seconds before a re-crawl is required."""
        return self.cache_ttl_hours * 60 * 60

    # ------------------------------------------------------------------
    # Origin site
    # ------------------------------------------------------------------
    base_url: str = field(
        default_factory=lambda: os.environ.get("YGK_BASE_URL", "https://www.naqt.com")
    )
    listing_path: str = field(
        default_factory=lambda: os.environ.get(
            "YGK_LISTING_PATH", "/you-gotta-know/by-category.jsp"
        )
    )
    excluded_category: str = field(
        default_factory=lambda: os.environ.get("YGK_EXCLUDED_CATEGORY", "By Publication Date")
    )

    @property
    def listing_url(self) -> str:
        """Absolute URL of the by-category listing page."""
        return self.base_url.rstrip("/") + self.listing_path

    # ------------------------------------------------------------------
    # Fetching / retry
    # ------------------------------------------------------------------
    listing_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LISTING_TIMEOUT", "30.0"))
    )
    detail_timeout: float = field(
        default_factory=lambda: float(os.environ.get("DETAIL_TIMEOUT", "15.0"))
    )
    max_retries: int = field(
        default_factory=lambda: int(os.environ.get("MAX_RETRIES", "2"))
    )
    jitter_min: float = field(
        default_factory=lambda: float(os.environ.get("JITTER_MIN", "0.5"))
    )
    jitter_max: float = field(
        default_factory=lambda: float(os.environ.get("JITTER_MAX", "1.5"))
    )
    backoff_step: float = field(
        default_factory=lambda: float(os.environ.get("BACKOFF_STEP", "2.0"))
    )

    # ------------------------------------------------------------------
    # Batch crawling
    # ------------------------------------------------------------------
    batch_size: int = field(
        default_factory=lambda: int(os.environ.get("BATCH_SIZE", "5"))
    )
    batch_delay: float = field(
        default_factory=lambda: float(os.environ.get("BATCH_DELAY", "2.0"))
    )

    # ------------------------------------------------------------------
    # Clue extraction
    # ------------------------------------------------------------------
    min_clue_length: int = field(
        default_factory=lambda: int(os.environ.get("MIN_CLUE_LENGTH", "100"))
    )
    clue_marker: str = field(
        default_factory=lambda: os.environ.get("CLUE_MARKER", "label")
    )


# Module-level singleton — import this everywhere:
#   from quizbowl.config import settings
settings = Settings()
