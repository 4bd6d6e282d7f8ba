"""FastAPI application factory.

Lifespan
--------
On startup the app builds a single :class:`CatalogCache` from ``settings``
and shares it across all requests via ``request.app.state.catalog``, so
concurrent cache misses queue behind one crawl.

Routers
-------
    /topics   — the quiz topic catalog (cached crawl of the origin site)
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from quizbowl.catalog import CatalogCache
from quizbowl.config import settings

from quizbowl.api.routers import topics as topics_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Attach the catalog cache on startup."""
    app.state.catalog = CatalogCache.from_settings(settings)
    yield


def create_app() -> FastAPI:
    """Return a fully-configured FastAPI application instance."""
    app = FastAPI(
        title="Quiz Topic Catalog API",
        description=(
            "Serves the catalog of NAQT 'You Gotta Know' topics and their clue "
            "lists, crawled from the origin site and cached for 24 hours."
        ),
        version="0.1.0",
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin (tighten for production).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(topics_router.router, prefix="/topics", tags=["topics"])

    return app


# Module-level instance used by uvicorn:
#   uvicorn quizbowl.api.app:app --reload
app = create_app()
