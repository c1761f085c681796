"""Docscope configuration and result models."""

from .config import (
    CONTAINER_SELECTORS,
    CONTENT_TAGS,
    DEFAULT_USER_AGENT,
    MAX_SEARCH_DEPTH,
    ByteSize,
    CrawlConfig,
    DocscopeConfig,
    ExtractionConfig,
    NetworkConfig,
)
from .result import ExtractionResult, PassName

__all__ = [
    # Config
    "ByteSize",
    "CrawlConfig",
    "DocscopeConfig",
    "ExtractionConfig",
    "NetworkConfig",
    # Defaults
    "CONTAINER_SELECTORS",
    "CONTENT_TAGS",
    "DEFAULT_USER_AGENT",
    "MAX_SEARCH_DEPTH",
    # Results
    "ExtractionResult",
    "PassName",
]
