"""HTML fragment to Markdown conversion."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from urllib.parse import urljoin

import html2text

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[a-zA-Z][a-zA-Z0-9]*(\s[^>]*)?/?>")


def looks_like_html(fragment: str) -> bool:
    return bool(_HTML_TAG.search(fragment))


class HtmlToMarkdown:
    """
    Converts extracted fragments to Markdown.

    HTML fragments go through html2text. Plain-text fragments and fenced
    code blocks are kept as they are.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert_fragments(result.fragments, result.url)
    """

    def __init__(
        self,
        body_width: int = 0,
        inline_links: bool = True,
        ignore_images: bool = True,
        ignore_tables: bool = False,
        protect_links: bool = False,
        unicode_snob: bool = True,
        mark_code: bool = True,
    ):
        """
        Initialize the Markdown converter.

        Args:
            body_width: Max line width (0 = no wrapping)
            inline_links: Use inline [text](url) vs reference style
            ignore_images: Skip image conversion
            ignore_tables: Skip table conversion
            protect_links: Wrap link targets in angle brackets
            unicode_snob: Use Unicode chars where possible
            mark_code: Mark code blocks with [code] markers
        """
        self._converter = html2text.HTML2Text()
        self._converter.body_width = body_width
        self._converter.inline_links = inline_links
        self._converter.protect_links = protect_links
        self._converter.ignore_images = ignore_images
        self._converter.ignore_tables = ignore_tables
        self._converter.unicode_snob = unicode_snob
        self._converter.mark_code = mark_code
        self._converter.single_line_break = False

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # html2text wraps code blocks in [code]...[/code] when mark_code is set
        markdown = re.sub(r"\[code\]\s*\n?", "```\n", markdown)
        markdown = re.sub(r"\n?\s*\[/code\]", "\n```", markdown)
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)
        markdown = "\n".join(line.rstrip() for line in markdown.split("\n"))
        return markdown.strip()

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            return f"[{text}]({urljoin(base_url, url)})"

        return re.sub(r"\[([^\]]+)\]\(([^)]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str) -> str:
        """
        Convert one HTML fragment to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links

        Returns:
            Markdown string
        """
        self._converter.baseurl = url
        markdown = self._converter.handle(html)
        markdown = self._clean_output(markdown)
        return self._fix_relative_links(markdown, url)

    def convert_fragments(self, fragments: Iterable[str], url: str) -> str:
        """
        Convert a sequence of extracted fragments, keeping their order.

        Args:
            fragments: Extracted fragments (HTML, plain text or fenced code)
            url: Source URL for resolving relative links

        Returns:
            Fragments converted and joined with blank lines
        """
        parts: list[str] = []
        for fragment in fragments:
            if fragment.startswith("```") or not looks_like_html(fragment):
                parts.append(fragment.strip())
            else:
                parts.append(self.convert(fragment, url))
        return "\n\n".join(part for part in parts if part) + "\n"
