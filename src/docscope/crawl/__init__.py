"""Page crawling for docscope."""

from .session import CrawlSession, HtmlCallback, same_site

__all__ = ["CrawlSession", "HtmlCallback", "same_site"]
