"""Typed failures raised by the extraction pipeline."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base class for every failure surfaced by docscope."""


class InvalidURL(ExtractionError):
    """The URL is not an absolute, well-formed http(s) URI.

    Raised before any network I/O happens.
    """

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"invalid URL {url!r}: {reason}")


class FetchError(ExtractionError):
    """Network, timeout or HTTP-level failure while fetching a page.

    Never retried internally. The underlying exception, if any, is chained
    as ``__cause__``.
    """

    def __init__(self, url: str, message: str, status_code: int | None = None) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"error fetching {url}: {message}")


class SymbolNotFound(ExtractionError):
    """The page was fetched but no content about the symbol could be located."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        super().__init__(f"function or method '{symbol}' not found in the documentation")


class NoContentExtracted(ExtractionError):
    """No symbol was requested and the page yielded nothing usable."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"no content extracted from the documentation URL {url}")
