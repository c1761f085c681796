"""Tests for the aiohttp-backed client."""

import asyncio
from unittest.mock import MagicMock

import aiohttp
import pytest
from docscope.errors import FetchError
from docscope.http import AsyncHttpClient, HttpResponse

URL = "https://docs.example.com/api"


class FakeStream:
    def __init__(self, chunks):
        self._chunks = chunks

    async def iter_chunked(self, size):
        for chunk in self._chunks:
            yield chunk


class FakeResponse:
    """Stands in for aiohttp's response context manager."""

    def __init__(self, status=200, chunks=(b"<p>ok</p>",), headers=None, url=URL):
        self.status = status
        self.headers = headers if headers is not None else {"Content-Type": "text/html; charset=utf-8"}
        self.url = url
        self.content = FakeStream(list(chunks))

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return False


def client_returning(response=None, side_effect=None, **kwargs) -> AsyncHttpClient:
    client = AsyncHttpClient(**kwargs)
    client._session = MagicMock()
    if side_effect is not None:
        client._session.get = MagicMock(side_effect=side_effect)
    else:
        client._session.get = MagicMock(return_value=response)
    return client


class TestGet:
    """Tests for AsyncHttpClient.get."""

    @pytest.mark.asyncio
    async def test_successful_fetch(self):
        client = client_returning(FakeResponse(chunks=[b"<p>", b"ok</p>"], url="https://docs.example.com/final"))

        response = await client.get(URL)

        assert response.status_code == 200
        assert response.content == b"<p>ok</p>"
        assert response.content_type == "text/html; charset=utf-8"
        assert response.url == "https://docs.example.com/final"

    @pytest.mark.asyncio
    async def test_redirects_allowed_and_timeout_passed(self):
        client = client_returning(FakeResponse(), default_timeout=12.0)

        await client.get(URL)

        kwargs = client._session.get.call_args.kwargs
        assert kwargs["allow_redirects"] is True
        assert kwargs["timeout"].total == 12.0

    @pytest.mark.asyncio
    async def test_per_call_timeout_overrides_default(self):
        client = client_returning(FakeResponse(), default_timeout=12.0)

        await client.get(URL, timeout=3.0)

        assert client._session.get.call_args.kwargs["timeout"].total == 3.0

    @pytest.mark.asyncio
    async def test_http_error_status(self):
        client = client_returning(FakeResponse(status=404))

        with pytest.raises(FetchError) as exc_info:
            await client.get(URL)

        assert exc_info.value.status_code == 404
        assert "HTTP 404" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_timeout_becomes_fetch_error(self):
        client = client_returning(side_effect=asyncio.TimeoutError(), default_timeout=5.0)

        with pytest.raises(FetchError) as exc_info:
            await client.get(URL)

        assert "timed out after 5.0s" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, asyncio.TimeoutError)

    @pytest.mark.asyncio
    async def test_connection_error_becomes_fetch_error(self):
        client = client_returning(side_effect=aiohttp.ClientConnectionError("refused"))

        with pytest.raises(FetchError) as exc_info:
            await client.get(URL)

        assert exc_info.value.status_code is None
        assert client._session.get.call_count == 1

    @pytest.mark.asyncio
    async def test_declared_content_length_too_large(self):
        headers = {"Content-Type": "text/html", "Content-Length": "2048"}
        client = client_returning(FakeResponse(headers=headers), max_content_size=1024)

        with pytest.raises(FetchError, match="too large"):
            await client.get(URL)

    @pytest.mark.asyncio
    async def test_streamed_body_too_large(self):
        client = client_returning(FakeResponse(chunks=[b"x" * 600, b"x" * 600]), max_content_size=1024)

        with pytest.raises(FetchError, match="limit exceeded"):
            await client.get(URL)

    @pytest.mark.asyncio
    async def test_requires_context_manager(self):
        client = AsyncHttpClient()

        with pytest.raises(RuntimeError):
            await client.get(URL)

    @pytest.mark.asyncio
    async def test_context_manager_opens_and_closes_session(self):
        client = AsyncHttpClient(user_agent="docscope-test/1.0")

        async with client:
            assert client._session is not None
            assert client._session.headers["User-Agent"] == "docscope-test/1.0"

        assert client._session is None


class TestDecodeContent:
    """Tests for response decoding."""

    def _response(self, content: bytes, content_type: str) -> HttpResponse:
        return HttpResponse(status_code=200, content=content, content_type=content_type, headers={}, url=URL)

    def test_declared_charset(self):
        client = AsyncHttpClient()
        response = self._response("café".encode("latin-1"), "text/html; charset=ISO-8859-1")

        assert client.decode_content(response) == "café"

    def test_quoted_charset(self):
        client = AsyncHttpClient()
        response = self._response("naïve".encode("utf-8"), 'text/html; charset="utf-8"')

        assert client.decode_content(response) == "naïve"

    def test_unknown_charset_falls_back_to_detection(self):
        client = AsyncHttpClient()
        response = self._response(b"<p>hello world</p>", "text/html; charset=not-a-codec")

        assert client.decode_content(response) == "<p>hello world</p>"
