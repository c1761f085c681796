"""Result types for an extraction call."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class PassName(str, Enum):
    """Which extraction pass produced a result."""

    TARGETED = "targeted"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ExtractionResult:
    """
    Successful outcome of one extraction call.

    Attributes:
        content: Extracted text/HTML, trimmed, never empty
        url: The URL that was requested
        symbol: The symbol the call focused on ("" for broad extraction)
        produced_by: Pass whose buffer became the result
        fragments: The fragments joined into ``content``, in order
        title: Page <title>, if the document had one
    """

    content: str
    url: str
    symbol: str
    produced_by: PassName
    fragments: tuple[str, ...]
    title: Optional[str] = None

    @property
    def fragment_count(self) -> int:
        return len(self.fragments)

    @property
    def used_fallback(self) -> bool:
        return self.produced_by is PassName.FALLBACK

    def preview(self, limit: int = 200) -> str:
        """Single-line preview of the content for log messages."""
        text = self.content.replace("\n", " ")
        if len(text) > limit:
            return text[:limit] + "..."
        return text
