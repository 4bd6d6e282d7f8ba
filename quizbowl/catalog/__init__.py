"""Catalog persistence and TTL caching.

Public re-exports so callers can write::

    from quizbowl.catalog import CatalogCache, CatalogStore
"""

from quizbowl.catalog.cache import CacheStatus, CatalogCache
from quizbowl.catalog.store import CatalogStore

__all__ = ["CacheStatus", "CatalogCache", "CatalogStore"]
