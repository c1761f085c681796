"""Extraction orchestration."""

from .extractor import (
    DocExtractor,
    PassState,
    extract_blocking,
    extract_documentation,
    needs_fallback,
    next_state,
)

__all__ = [
    "DocExtractor",
    "PassState",
    "extract_blocking",
    "extract_documentation",
    "needs_fallback",
    "next_state",
]
