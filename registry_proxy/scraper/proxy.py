"""
Purpose:
- Pass-through download relay in two stages:
  1) open_upstream: GET the target as a stream, hand back status + headers + body handle
  2) relay_body:    copy the raw body to the caller chunk by chunk, then close upstream
- Nothing is buffered whole and nothing touches disk.
- No host allow-list: any URL the browser sends is fetched.
"""

from __future__ import annotations
import httpx
from dataclasses import dataclass
from loguru import logger
from typing import AsyncIterator, Awaitable, Callable
from ..core.errors import UpstreamError
from ..core.settings import Settings, settings
from .fetcher import browser_headers

DOWNLOAD_FAILED = "Failed to download the file"

# Connection-scoped headers (RFC 7230 6.1); the local server sets its own.
HOP_BY_HOP_HEADERS = frozenset({
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
})

@dataclass
class UpstreamStream:
    url: str
    status_code: int
    # multi-valued (repeated Set-Cookie etc. stay separate)
    headers: httpx.Headers
    body: AsyncIterator[bytes]
    close: Callable[[], Awaitable[None]]

def forwardable_headers(headers: httpx.Headers) -> httpx.Headers:
    return httpx.Headers([
        (k, v) for k, v in headers.raw if k.decode("latin-1").lower() not in HOP_BY_HOP_HEADERS
    ])

async def open_upstream(url: str, client: httpx.AsyncClient, cfg: Settings = settings) -> UpstreamStream:
    """
    Stage 1: connect and read the response head only.
    Raises UpstreamError (with the response closed) on connect failure or non-2xx.
    """
    logger.info("Opening download stream for {}", url)
    try:
        req = client.build_request("GET", url, headers=browser_headers(cfg))
        resp = await client.send(req, stream=True)
    except Exception as e:
        logger.error("Download error for {}: {!r}", url, e)
        raise UpstreamError(DOWNLOAD_FAILED) from e

    if resp.is_error:
        await resp.aclose()
        logger.error("Download error for {}: upstream answered {}", url, resp.status_code)
        raise UpstreamError(DOWNLOAD_FAILED)

    return UpstreamStream(
        url=url,
        status_code=resp.status_code,
        headers=forwardable_headers(resp.headers),
        # raw = exactly the bytes on the wire; Content-Encoding is forwarded as-is
        body=resp.aiter_raw(),
        close=resp.aclose,
    )

async def relay_body(upstream: UpstreamStream) -> AsyncIterator[bytes]:
    """
    Stage 2: yield upstream chunks as they arrive.
    Mid-stream failures propagate so the server aborts the connection (no resume);
    client disconnects cancel the generator. Either way the upstream response is closed.
    """
    sent = 0
    try:
        async for chunk in upstream.body:
            sent += len(chunk)
            yield chunk
    except httpx.HTTPError as e:
        logger.error("Download of {} broke after {} bytes: {!r}", upstream.url, sent, e)
        raise
    finally:
        await upstream.close()
    logger.info("Relayed {} bytes from {}", sent, upstream.url)
