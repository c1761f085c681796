"""Two-pass documentation extractor."""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from types import TracebackType

from bs4 import Tag

from ..crawl import CrawlSession
from ..errors import NoContentExtracted, SymbolNotFound
from ..extraction import (
    ContentBuffer,
    SectionExtractor,
    Selector,
    Wildcard,
    build_selectors,
    clean_text,
    fenced_code,
    harvest_blocks,
    parse_selector,
)
from ..extraction.document import is_within, node_text
from ..http import AsyncHttpClient
from ..http.protocols import HttpClient
from ..models.config import DocscopeConfig
from ..models.result import ExtractionResult, PassName
from ..security.url_validator import UrlValidator

logger = logging.getLogger(__name__)

CODE_SELECTORS: list[Selector] = [parse_selector("pre"), parse_selector("code")]


class PassState(str, Enum):
    """States of one extraction call."""

    TARGETED = "targeted"
    EVALUATING = "evaluating"
    FALLBACK = "fallback"
    DONE = "done"


def needs_fallback(text: str, symbol: str) -> bool:
    """
    Whether the targeted pass output is unusable.

    Args:
        text: Joined targeted-pass buffer
        symbol: Requested symbol ("" for broad extraction)

    Returns:
        True if the text is empty, or a symbol was requested and the text
        never contains it
    """
    if not text.strip():
        return True
    return bool(symbol) and symbol not in text


def next_state(state: PassState, text: str, symbol: str, fallback_enabled: bool = True) -> PassState:
    """
    Transition function of the extraction state machine.

    TARGETED -> EVALUATING -> (FALLBACK | DONE), FALLBACK -> DONE.
    """
    if state is PassState.TARGETED:
        return PassState.EVALUATING
    if state is PassState.EVALUATING:
        if fallback_enabled and needs_fallback(text, symbol):
            return PassState.FALLBACK
        return PassState.DONE
    return PassState.DONE


class DocExtractor:
    """
    Extracts the documentation for one symbol (or a whole page) from a URL.

    The targeted pass matches symbol-specific and generic container
    selectors and runs the section extractor over them, while code blocks
    mentioning the symbol are collected alongside. If that yields nothing,
    or nothing that mentions the symbol, a fallback pass fetches the page
    again and tries every content-bearing element instead.

    Example:
        async with DocExtractor(DocscopeConfig()) as extractor:
            result = await extractor.extract("https://docs.example.com/api", "createUser")
            print(result.content)
    """

    def __init__(self, config: DocscopeConfig | None = None, http_client: HttpClient | None = None):
        """
        Initialize the extractor.

        Args:
            config: Extraction configuration (defaults if None)
            http_client: Client to fetch pages with. If None, an
                AsyncHttpClient is created and owned by this extractor.
        """
        self.config = config or DocscopeConfig()
        self._client: HttpClient | None = http_client
        self._owned_client: AsyncHttpClient | None = None
        self._validator = UrlValidator(block_private_hosts=self.config.network.block_private_hosts)
        self._content_tags = frozenset(tag.lower() for tag in self.config.extraction.content_tags)
        # Fail fast on bad selector strings in config
        build_selectors("", self.config.extraction.container_selectors)

    async def __aenter__(self) -> DocExtractor:
        if self._client is None:
            network = self.config.network
            self._owned_client = AsyncHttpClient(
                max_content_size=network.max_content_size,
                user_agent=network.user_agent,
                proxy=network.proxy,
                default_timeout=network.timeout,
            )
            await self._owned_client.__aenter__()
            self._client = self._owned_client
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._owned_client is not None:
            await self._owned_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_client = None
            self._client = None

    def _diag(self, message: str) -> None:
        if self.config.verbose:
            logger.info(message)
        else:
            logger.debug(message)

    async def extract(self, url: str, symbol: str = "") -> ExtractionResult:
        """
        Run the extraction state machine for one URL.

        Args:
            url: Absolute http(s) URL of the documentation page
            symbol: Function/method to focus on; "" extracts broadly

        Returns:
            ExtractionResult with non-empty content

        Raises:
            InvalidURL: Before any network call, for malformed URLs
            FetchError: If either pass fails to fetch the page
            SymbolNotFound: Nothing about ``symbol`` was found
            NoContentExtracted: Broad extraction found nothing
        """
        self._validator.require_valid(url)
        if self._client is None:
            raise RuntimeError("Extractor not initialized. Use 'async with' context manager.")

        self._diag(f"Starting extraction of {url}" + (f" for {symbol!r}" if symbol else ""))

        state = PassState.TARGETED
        buffer = ContentBuffer()
        produced_by = PassName.TARGETED
        title: str | None = None

        while state is not PassState.DONE:
            if state is PassState.TARGETED:
                buffer, title = await self._targeted_pass(url, symbol)
                produced_by = PassName.TARGETED
                self._diag(f"Targeted pass collected {len(buffer)} fragment(s)")
            elif state is PassState.FALLBACK:
                if symbol:
                    self._diag(f"Symbol {symbol!r} not found in first pass, trying fallback pass")
                else:
                    self._diag("No content in first pass, trying fallback pass")
                buffer, fallback_title = await self._fallback_pass(url, symbol)
                title = title or fallback_title
                produced_by = PassName.FALLBACK
                self._diag(f"Fallback pass collected {len(buffer)} fragment(s)")

            state = next_state(state, buffer.text, symbol, self.config.extraction.fallback)

        return self._finish(url, symbol, buffer, produced_by, title)

    def _finish(
        self,
        url: str,
        symbol: str,
        buffer: ContentBuffer,
        produced_by: PassName,
        title: str | None,
    ) -> ExtractionResult:
        content = buffer.text
        if not content:
            if symbol:
                raise SymbolNotFound(symbol)
            raise NoContentExtracted(url)

        fragments = buffer.fragments
        if self.config.extraction.include_title and title:
            heading = f"# {title}"
            content = f"{heading}\n\n{content}"
            fragments = (heading,) + fragments

        result = ExtractionResult(
            content=content,
            url=url,
            symbol=symbol,
            produced_by=produced_by,
            fragments=fragments,
            title=title,
        )
        self._diag(f"Extracted content preview: {result.preview()}")
        return result

    def _new_session(self, max_depth: int) -> CrawlSession:
        assert self._client is not None
        return CrawlSession(self._client, max_depth=max_depth, timeout=self.config.network.timeout)

    async def _targeted_pass(self, url: str, symbol: str) -> tuple[ContentBuffer, str | None]:
        buffer = ContentBuffer()
        session = self._new_session(self.config.crawl.max_depth)
        selectors = build_selectors(symbol, self.config.extraction.container_selectors)

        if symbol:
            sections = SectionExtractor(symbol, self.config.extraction.max_search_depth)

            def on_container(node: Tag, selector: Selector) -> None:
                if symbol not in node_text(node):
                    return
                logger.debug(f"Container {selector} matched <{node.name}>")
                buffer.append(sections.extract(node))

            session.on_html(selectors, on_container)
        else:

            def on_container(node: Tag, selector: Selector) -> None:
                logger.debug(f"Container {selector} matched <{node.name}>")
                buffer.append(clean_text(node))
                buffer.extend(harvest_blocks(node))

            session.on_html(selectors, on_container)

        def on_code(node: Tag, selector: Selector) -> None:
            buffer.append(fenced_code(node, symbol))

        session.on_html(CODE_SELECTORS, on_code)

        document = await session.visit(url)
        return buffer, document.title

    async def _fallback_pass(self, url: str, symbol: str) -> tuple[ContentBuffer, str | None]:
        buffer = ContentBuffer()
        session = self._new_session(self.config.crawl.fallback_max_depth)

        if symbol:
            sections = SectionExtractor(symbol, self.config.extraction.max_search_depth)

            def on_element(node: Tag, selector: Selector) -> None:
                if node.name not in self._content_tags:
                    return
                if symbol not in node_text(node):
                    return
                buffer.append(sections.extract(node))

        else:
            emitted: set[int] = set()

            def on_element(node: Tag, selector: Selector) -> None:
                if node.name not in self._content_tags or is_within(node, emitted):
                    return
                text = clean_text(node)
                if text:
                    buffer.append(text)
                    emitted.add(id(node))

        session.on_html(Wildcard(), on_element)

        document = await session.visit(url)
        return buffer, document.title


async def extract_documentation(
    url: str,
    symbol: str = "",
    *,
    timeout: float | None = None,
    verbose: bool | None = None,
    config: DocscopeConfig | None = None,
    http_client: HttpClient | None = None,
) -> ExtractionResult:
    """
    Convenience wrapper: one extraction with its own HTTP session.

    Args:
        url: Documentation page URL
        symbol: Function/method name, or "" for the whole page
        timeout: Overrides ``config.network.timeout``
        verbose: Overrides ``config.verbose``
        config: Base configuration
        http_client: Optional client to use instead of a new AsyncHttpClient

    Returns:
        ExtractionResult
    """
    config = config or DocscopeConfig()
    updates: dict = {}
    if timeout is not None:
        updates["network"] = config.network.model_copy(update={"timeout": timeout})
    if verbose is not None:
        updates["verbose"] = verbose
    if updates:
        config = config.model_copy(update=updates)

    async with DocExtractor(config, http_client=http_client) as extractor:
        return await extractor.extract(url, symbol)


def extract_blocking(
    url: str,
    symbol: str = "",
    *,
    timeout: float | None = None,
    verbose: bool | None = None,
    config: DocscopeConfig | None = None,
) -> ExtractionResult:
    """Synchronous wrapper around ``extract_documentation``."""
    return asyncio.run(extract_documentation(url, symbol, timeout=timeout, verbose=verbose, config=config))
