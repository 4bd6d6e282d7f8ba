"""FastAPI HTTP layer package.

Public re-export so callers can write::

    from quizbowl.api import app

    uvicorn quizbowl.api:app --reload
"""

from quizbowl.api.app import app

__all__ = ["app"]
