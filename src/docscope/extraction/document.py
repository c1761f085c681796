"""Read-only view over a parsed HTML page."""

from __future__ import annotations

import re
from collections.abc import Iterator
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

HEADING_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6")

_REFRESH_URL = re.compile(r"url\s*=\s*['\"]?([^'\";]+)", re.IGNORECASE)


def is_heading(tag: Tag) -> bool:
    return tag.name in HEADING_TAGS


def heading_level(tag: Tag) -> int:
    """Return 1-6 for h1-h6, 0 for anything else."""
    if is_heading(tag):
        return int(tag.name[1])
    return 0


def node_text(tag: Tag) -> str:
    """Full text of a node and its descendants, concatenated as-is."""
    return tag.get_text()


def clean_text(tag: Tag) -> str:
    """Node text with line endings normalized and blank runs collapsed."""
    text = tag.get_text()
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = "\n".join(line.rstrip() for line in text.split("\n"))
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def inner_html(tag: Tag) -> str:
    return tag.decode_contents()


def outer_html(tag: Tag) -> str:
    return tag.decode()


def next_element_sibling(tag: Tag) -> Tag | None:
    """Next sibling that is an element, skipping text and comments."""
    sibling = tag.find_next_sibling()
    return sibling if isinstance(sibling, Tag) else None


def is_within(tag: Tag, node_ids: set[int]) -> bool:
    """True if the tag or one of its ancestors is in ``node_ids`` (by identity)."""
    if id(tag) in node_ids:
        return True
    return any(id(parent) in node_ids for parent in tag.parents)


class Document:
    """
    One fetched page, parsed once and never modified.

    Extraction code walks the tree and reads text and markup from it;
    it never decomposes, re-parents or annotates nodes.

    Example:
        document = Document.parse(html, "https://docs.example.com/api")
        for node in document.iter_elements():
            ...
    """

    def __init__(self, soup: BeautifulSoup, url: str):
        self._soup = soup
        self.url = url

    @classmethod
    def parse(cls, html: str, url: str) -> Document:
        return cls(BeautifulSoup(html, "html.parser"), url)

    @property
    def root(self) -> BeautifulSoup:
        return self._soup

    @property
    def title(self) -> str | None:
        title = self._soup.find("title")
        if isinstance(title, Tag):
            text = title.get_text().strip()
            return text or None
        return None

    def iter_elements(self) -> Iterator[Tag]:
        """Yield every element in document order (pre-order)."""
        for node in self._soup.find_all(True):
            yield node

    def meta_refresh_url(self) -> str | None:
        """
        Absolute target of a ``<meta http-equiv="refresh">`` redirect.

        Returns:
            The resolved URL, or None if the page has no such redirect
        """
        for meta in self._soup.find_all("meta"):
            if str(meta.get("http-equiv", "")).lower() != "refresh":
                continue
            match = _REFRESH_URL.search(str(meta.get("content", "")))
            if match:
                return urljoin(self.url, match.group(1).strip())
        return None
