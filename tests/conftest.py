"""Shared fixtures: an in-memory HTTP client serving static HTML."""

from typing import Optional, Union

import pytest
from bs4 import BeautifulSoup
from docscope.errors import FetchError
from docscope.http.protocols import HttpResponse

CannedPage = Union[str, Exception, list]


class FakeHttpClient:
    """
    Serves canned pages by URL.

    A page may be an HTML string, an exception to raise, or a list of
    either that is consumed one entry per request.
    """

    def __init__(self, pages: Optional[dict[str, CannedPage]] = None):
        self.pages: dict[str, CannedPage] = dict(pages or {})
        self.requests: list[str] = []

    async def get(self, url, *, timeout=None, headers=None) -> HttpResponse:
        self.requests.append(url)
        page = self.pages.get(url)
        if isinstance(page, list):
            page = page.pop(0) if page else None
        if isinstance(page, Exception):
            raise page
        if page is None:
            raise FetchError(url, "HTTP 404", status_code=404)
        return HttpResponse(
            status_code=200,
            content=page.encode("utf-8"),
            content_type="text/html; charset=utf-8",
            headers={},
            url=url,
        )

    def decode_content(self, response: HttpResponse) -> str:
        return response.content.decode("utf-8")


@pytest.fixture
def fake_client():
    """Factory fixture: fake_client({url: html}) -> FakeHttpClient."""

    def make(pages: Optional[dict[str, CannedPage]] = None) -> FakeHttpClient:
        return FakeHttpClient(pages)

    return make


@pytest.fixture
def soup():
    """Parse an HTML snippet with the same parser the extractor uses."""

    def parse(html: str) -> BeautifulSoup:
        return BeautifulSoup(html, "html.parser")

    return parse
