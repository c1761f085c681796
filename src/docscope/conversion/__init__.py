"""Output conversion for docscope (HTML fragments to Markdown)."""

from .markdown import HtmlToMarkdown, looks_like_html

__all__ = ["HtmlToMarkdown", "looks_like_html"]
