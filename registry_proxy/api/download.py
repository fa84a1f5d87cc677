"""
Purpose:
- Expose GET /api/download?url=...: stream any remote file back through us.
- Upstream headers go out before the first body byte (Content-Type/Disposition/Length).
"""

from fastapi import APIRouter, Depends, Query
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask
from typing import Optional
import httpx
from ..core.errors import InvalidInputError
from ..scraper.schema import ErrorResponse
from ..scraper.proxy import open_upstream, relay_body
from .deps import get_http_client

router = APIRouter(prefix="/api", tags=["download"])

@router.get(
    "/download",
    response_class=StreamingResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def download(
    url: Optional[str] = Query(default=None, description="Absolute URL of the file to relay"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    if not url:
        raise InvalidInputError("URL is required")
    upstream = await open_upstream(url, client)
    response = StreamingResponse(
        relay_body(upstream),
        status_code=upstream.status_code,
        # in case the body generator never starts (client gone before first chunk)
        background=BackgroundTask(upstream.close),
    )
    # raw pairs, so repeated headers (Set-Cookie) go out one line each
    response.raw_headers.extend(upstream.headers.raw)
    return response
