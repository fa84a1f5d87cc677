"""Tests for the two-stage download relay."""

import hashlib

import httpx
import pytest

from registry_proxy.core.errors import UpstreamError
from registry_proxy.core.settings import settings
from registry_proxy.scraper.proxy import (
    DOWNLOAD_FAILED,
    UpstreamStream,
    forwardable_headers,
    open_upstream,
    relay_body,
)

PAYLOAD = bytes(range(256)) * 4096


async def stream_of(data: bytes, chunk_size: int = 64 * 1024):
    """Unread async body, the way a real socket delivers it."""
    for i in range(0, len(data), chunk_size):
        yield data[i:i + chunk_size]


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class FakeBody:
    """Byte source standing in for an upstream response body."""

    def __init__(self, chunks, error: Exception | None = None):
        self.chunks = chunks
        self.error = error
        self.closed = False

    async def _iter(self):
        for chunk in self.chunks:
            yield chunk
        if self.error:
            raise self.error

    async def close(self):
        self.closed = True

    def stream(self) -> UpstreamStream:
        return UpstreamStream(
            url="https://example.org/file.pdf",
            status_code=200,
            headers=httpx.Headers(),
            body=self._iter(),
            close=self.close,
        )


class TestForwardableHeaders:
    def test_end_to_end_headers_kept(self):
        headers = httpx.Headers({
            "Content-Type": "application/pdf",
            "Content-Disposition": 'attachment; filename="sia.pdf"',
            "Content-Length": "10",
        })
        assert forwardable_headers(headers) == {
            "content-type": "application/pdf",
            "content-disposition": 'attachment; filename="sia.pdf"',
            "content-length": "10",
        }

    def test_hop_by_hop_headers_dropped(self):
        headers = httpx.Headers({
            "Content-Type": "text/plain",
            "Connection": "keep-alive",
            "Keep-Alive": "timeout=5",
            "Transfer-Encoding": "chunked",
        })
        assert forwardable_headers(headers) == {"content-type": "text/plain"}

    def test_repeated_headers_stay_separate(self):
        headers = httpx.Headers([
            ("Set-Cookie", "a=1; Path=/"),
            ("Set-Cookie", "b=2; Path=/"),
            ("Connection", "close"),
        ])
        forwarded = forwardable_headers(headers)
        assert forwarded.get_list("set-cookie") == ["a=1; Path=/", "b=2; Path=/"]
        assert "connection" not in forwarded


@pytest.mark.asyncio
async def test_open_upstream_then_relay_is_byte_identical() -> None:
    seen: list[httpx.Request] = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            headers={"Content-Type": "application/pdf", "Content-Length": str(len(PAYLOAD))},
            content=stream_of(PAYLOAD),
        )

    async with _client(handler) as client:
        upstream = await open_upstream("https://example.org/doc.pdf", client)
        assert upstream.headers["content-type"] == "application/pdf"
        assert upstream.headers["content-length"] == str(len(PAYLOAD))
        received = b"".join([chunk async for chunk in relay_body(upstream)])

    assert hashlib.sha256(received).hexdigest() == hashlib.sha256(PAYLOAD).hexdigest()
    assert len(seen) == 1
    assert seen[0].headers["user-agent"] == settings.user_agent


@pytest.mark.asyncio
async def test_open_upstream_non_2xx_raises() -> None:
    async with _client(lambda r: httpx.Response(404, text="not found")) as client:
        with pytest.raises(UpstreamError) as exc:
            await open_upstream("https://example.org/missing.pdf", client)
    assert exc.value.message == DOWNLOAD_FAILED


@pytest.mark.asyncio
async def test_open_upstream_connect_error_raises() -> None:
    def handler(request):
        raise httpx.ConnectError("no route to host", request=request)

    async with _client(handler) as client:
        with pytest.raises(UpstreamError):
            await open_upstream("https://example.org/doc.pdf", client)


@pytest.mark.asyncio
async def test_relay_body_yields_chunks_in_order_and_closes() -> None:
    body = FakeBody([b"one", b"two", b"three"])
    received = [chunk async for chunk in relay_body(body.stream())]
    assert received == [b"one", b"two", b"three"]
    assert body.closed


@pytest.mark.asyncio
async def test_relay_body_mid_stream_failure_propagates_and_closes() -> None:
    body = FakeBody([b"partial"], error=httpx.ReadError("reset by peer"))
    received = []
    with pytest.raises(httpx.ReadError):
        async for chunk in relay_body(body.stream()):
            received.append(chunk)
    assert received == [b"partial"]
    assert body.closed


@pytest.mark.asyncio
async def test_relay_body_abandoned_by_client_closes_upstream() -> None:
    body = FakeBody([b"a", b"b", b"c"])
    relay = relay_body(body.stream())
    assert await relay.__anext__() == b"a"
    await relay.aclose()
    assert body.closed
