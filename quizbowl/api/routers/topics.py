"""Topic catalog endpoint.

Routes
------
GET /topics    → the cached catalog, crawled on a miss
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class TopicOut(BaseModel):
    title: str
    content: str
    category: str


class CatalogResponse(BaseModel):
    categories: list[str]
    topics: list[TopicOut]


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@router.get("", response_model=CatalogResponse)
async def get_topics(request: Request) -> Any:
    """Return every topic with its clues, grouped by category name.

    Served from the on-disk artifact while it is fresh; otherwise the origin
    is crawled first.  Only a failure to persist the artifact yields a 500.
    """
    cache = request.app.state.catalog
    try:
        snapshot = await cache.get()
    except OSError as exc:
        print(f"[topics] ✗ Catalog artifact I/O failed: {exc!r:.120}")
        return JSONResponse(status_code=500, content={"error": "Failed to fetch topics"})
    return snapshot.to_dict()
