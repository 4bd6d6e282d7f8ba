"""Data models for the topic crawler.

Plain dataclasses, not ORM models.  :class:`CatalogSnapshot` is the only type
that is persisted; it converts to and from the JSON artifact shape::

    {"categories": [...], "topics": [{"title", "content", "category"}]}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

CLUE_SEPARATOR = "\n\n"


@dataclass(frozen=True)
class TopicLink:
    """A topic anchor found on the listing page, before its page is crawled."""

    title: str
    url: str
    category: str


@dataclass(frozen=True)
class Topic:
    title: str
    content: str
    category: str

    def clues(self) -> list[str]:
        """Split :attr:`content` back into its individual clue strings."""
        return [c for c in self.content.split(CLUE_SEPARATOR) if c]

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "content": self.content, "category": self.category}


@dataclass(frozen=True)
class Listing:
    """Parsed listing page: ordered categories and the topic links under them."""

    categories: list[str] = field(default_factory=list)
    links: list[TopicLink] = field(default_factory=list)


@dataclass(frozen=True)
class CatalogSnapshot:
    """The complete result of one crawl run.  Never mutated once built."""

    categories: tuple[str, ...] = ()
    topics: tuple[Topic, ...] = ()

    @classmethod
    def empty(cls) -> CatalogSnapshot:
        return cls()

    def topics_in(self, category: str) -> list[Topic]:
        return [t for t in self.topics if t.category == category]

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON artifact shape."""
        return {
            "categories": list(self.categories),
            "topics": [t.to_dict() for t in self.topics],
        }

    @classmethod
    def from_dict(cls, data: Any) -> CatalogSnapshot:
        """Build a snapshot from a decoded JSON artifact.

        Raises:
            ValueError: If *data* does not have the artifact shape.
        """
        if not isinstance(data, dict):
            raise ValueError("catalog artifact must be a JSON object")
        categories = data.get("categories")
        topics = data.get("topics")
        if not isinstance(categories, list) or not isinstance(topics, list):
            raise ValueError("catalog artifact needs 'categories' and 'topics' lists")
        try:
            parsed = tuple(
                Topic(
                    title=str(t["title"]),
                    content=str(t["content"]),
                    category=str(t["category"]),
                )
                for t in topics
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"malformed topic entry: {exc}") from exc
        return cls(categories=tuple(str(c) for c in categories), topics=parsed)
