"""Single-page crawl session with element callbacks."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable, Union
from urllib.parse import urlparse

from bs4 import Tag

from ..extraction.document import Document
from ..extraction.selectors import Selector, first_match
from ..http.protocols import HttpClient

logger = logging.getLogger(__name__)

HtmlCallback = Callable[[Tag, Selector], None]


@dataclass
class _Registration:
    selectors: list[Selector]
    callback: HtmlCallback


def same_site(url: str, other: str) -> bool:
    """True if both URLs share scheme-independent host and port."""
    return urlparse(url).netloc.lower() == urlparse(other).netloc.lower()


class CrawlSession:
    """
    Fetches one page and fires element callbacks over it.

    Callbacks are registered with ``on_html`` against an ordered list of
    selectors. After the page is parsed every element is visited in
    document order; for each registration the callback fires at most once
    per element, for the first selector in that registration's list that
    matches. ``visit`` returns only once every callback has run.

    Depth 1 fetches just the requested page. Depth 2 additionally follows
    one same-site ``<meta http-equiv="refresh">`` redirect. HTTP redirects
    are handled by the HTTP client.

    Example:
        session = CrawlSession(http_client, max_depth=2, timeout=30)
        session.on_html([parse_selector("main")], lambda node, sel: print(node.name))
        document = await session.visit("https://docs.example.com/api")
    """

    def __init__(self, http_client: HttpClient, max_depth: int = 2, timeout: float | None = None):
        """
        Initialize the session.

        Args:
            http_client: Client used for the page fetch(es)
            max_depth: 1 = the page only, 2 = plus one meta-refresh hop
            timeout: Per-request timeout in seconds (client default if None)
        """
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self._client = http_client
        self._max_depth = max_depth
        self._timeout = timeout
        self._registrations: list[_Registration] = []
        self._visited = False

    def on_html(self, selectors: Union[Selector, Sequence[Selector]], callback: HtmlCallback) -> None:
        """
        Register a callback for elements matching any of ``selectors``.

        Args:
            selectors: One selector or a list in priority order
            callback: Called with (element, matched selector)
        """
        if not isinstance(selectors, (list, tuple)):
            selectors = [selectors]  # type: ignore[list-item]
        self._registrations.append(_Registration(list(selectors), callback))

    async def visit(self, url: str) -> Document:
        """
        Fetch ``url``, parse it and run all callbacks.

        Args:
            url: Absolute page URL

        Returns:
            The parsed document the callbacks ran over

        Raises:
            FetchError: If the fetch fails
            RuntimeError: If the session was already used
        """
        if self._visited:
            raise RuntimeError("CrawlSession instances are single-use")
        self._visited = True

        document = await self._load(url, depth=1)
        self._dispatch(document)
        return document

    async def _load(self, url: str, depth: int) -> Document:
        logger.debug(f"Fetching {url} (depth {depth}/{self._max_depth})")
        response = await self._client.get(url, timeout=self._timeout)
        html = self._client.decode_content(response)
        document = Document.parse(html, response.url or url)

        if depth < self._max_depth:
            target = document.meta_refresh_url()
            if target and target != document.url and same_site(target, document.url):
                logger.debug(f"Following meta refresh from {document.url} to {target}")
                return await self._load(target, depth + 1)

        return document

    def _dispatch(self, document: Document) -> None:
        fired = 0
        for node in document.iter_elements():
            for registration in self._registrations:
                selector = first_match(registration.selectors, node)
                if selector is not None:
                    registration.callback(node, selector)
                    fired += 1
        logger.debug(f"Dispatched {fired} callback(s) over {document.url}")
