"""Async HTTP client for fetching documentation pages."""

from __future__ import annotations

import asyncio
import logging
from types import TracebackType

import aiohttp
from charset_normalizer import from_bytes as detect_encoding

from ..errors import FetchError
from ..models.config import DEFAULT_USER_AGENT
from .protocols import HttpResponse

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async HTTP client used by crawl sessions.

    Features:
    - One attempt per request: failures surface as FetchError, never retried
    - Content size limits to prevent memory exhaustion
    - Intelligent encoding detection
    - Timeout controls

    Example:
        async with AsyncHttpClient(default_timeout=30) as client:
            response = await client.get("https://example.com")
            print(client.decode_content(response))
    """

    MAX_CONTENT_SIZE = 50 * 1024 * 1024  # 50 MB

    def __init__(
        self,
        max_content_size: int = MAX_CONTENT_SIZE,
        user_agent: str | None = None,
        proxy: str | None = None,
        default_timeout: float = 30.0,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            max_content_size: Maximum response size in bytes
            user_agent: Custom User-Agent string
            proxy: Proxy URL (http:// or socks5://)
            default_timeout: Default request timeout in seconds
        """
        self._max_content_size = max_content_size
        self._proxy = proxy
        self._default_timeout = default_timeout
        self._user_agent = user_agent or DEFAULT_USER_AGENT

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        connector = aiohttp.TCPConnector(
            limit=10,
            ttl_dns_cache=300,
        )
        self._session = aiohttp.ClientSession(
            connector=connector,
            headers={"User-Agent": self._user_agent},
        )
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _decode_content(self, content: bytes, content_type: str) -> str:
        """
        Decode content with intelligent encoding detection.

        Fallback chain:
        1. Content-Type header charset
        2. charset-normalizer detection
        3. UTF-8 with replacement

        Args:
            content: Raw bytes content
            content_type: Content-Type header value

        Returns:
            Decoded string
        """
        encoding = None
        if content_type:
            for part in content_type.split(";"):
                part = part.strip()
                if part.lower().startswith("charset="):
                    encoding = part.split("=", 1)[1].strip().strip("\"'")
                    break

        if encoding:
            try:
                return content.decode(encoding)
            except (UnicodeDecodeError, LookupError):
                logger.debug(f"Failed to decode with declared encoding: {encoding}")

        best_match = detect_encoding(content).best()
        if best_match is not None:
            logger.debug(f"Detected encoding: {best_match.encoding}")
            return str(best_match)

        return content.decode("utf-8", errors="replace")

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform one HTTP GET request.

        Redirects are followed by aiohttp.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            FetchError: On timeouts, network errors, HTTP error statuses
                and oversized bodies
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout

        try:
            async with self._session.get(
                url,
                timeout=aiohttp.ClientTimeout(total=timeout_val),
                headers=headers,
                proxy=self._proxy,
                allow_redirects=True,
            ) as response:
                if response.status >= 400:
                    raise FetchError(url, f"HTTP {response.status}", status_code=response.status)

                # Check Content-Length if available
                content_length = response.headers.get("Content-Length")
                if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
                    raise FetchError(url, f"content too large: {content_length} bytes")

                # Read content with size limit
                content = b""
                async for chunk in response.content.iter_chunked(8192):
                    content += chunk
                    if len(content) > self._max_content_size:
                        raise FetchError(url, f"content size limit exceeded: >{self._max_content_size} bytes")

                return HttpResponse(
                    status_code=response.status,
                    content=content,
                    content_type=response.headers.get("Content-Type", ""),
                    headers=dict(response.headers),
                    url=str(response.url),
                )

        except asyncio.TimeoutError as e:
            logger.error(f"Timed out after {timeout_val}s fetching {url}")
            raise FetchError(url, f"timed out after {timeout_val}s") from e
        except aiohttp.ClientError as e:
            logger.error(f"HTTP fetch error for {url}: {e}")
            raise FetchError(url, str(e)) from e

    def decode_content(self, response: HttpResponse) -> str:
        """
        Decode response content to string.

        Args:
            response: HttpResponse to decode

        Returns:
            Decoded string content
        """
        return self._decode_content(response.content, response.content_type)
