"""Typed view over a parsed HTML page.

The listing and detail parsers only care about three kinds of element, so the
page is flattened into a document-ordered list of :data:`DocNode` values
instead of being walked by tag name.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from bs4 import BeautifulSoup, Tag

_HEADING_TAG = "h2"


@dataclass(frozen=True)
class Heading:
    text: str


@dataclass(frozen=True)
class Anchor:
    """A link that sits inside a ``<ul><li>``."""

    text: str
    href: str


@dataclass(frozen=True)
class ListItem:
    """An ``<li>`` element: its visible text and its raw inner HTML."""

    text: str
    markup: str


DocNode = Union[Heading, Anchor, ListItem]


def _in_list(tag: Tag) -> bool:
    item = tag.find_parent("li")
    return item is not None and item.find_parent("ul") is not None


def parse_document(html: str) -> list[DocNode]:
    """Return every heading, list anchor and list item of *html* in document order."""
    soup = BeautifulSoup(html, "html.parser")
    nodes: list[DocNode] = []
    for tag in soup.find_all([_HEADING_TAG, "a", "li"]):
        if tag.name == _HEADING_TAG:
            nodes.append(Heading(text=tag.get_text().strip()))
        elif tag.name == "a":
            if _in_list(tag):
                nodes.append(Anchor(text=tag.get_text().strip(), href=(tag.get("href") or "").strip()))
        else:
            nodes.append(ListItem(text=tag.get_text(), markup=tag.decode_contents()))
    return nodes
