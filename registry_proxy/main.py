"""
Purpose:
- FastAPI application factory and router mounts.
- Adds CORS so the browser UI can call the proxy from any origin.
- Owns the shared outbound AsyncClient (opened at startup, closed at shutdown).
- Maps ProxyError / bad request bodies to {"error": ...} JSON.
"""

from contextlib import asynccontextmanager
from typing import Optional
import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from .core.errors import ProxyError
from .core.settings import settings
from .scraper.fetcher import build_client
from .api.health import router as health_router
from .api.search import router as search_router
from .api.download import router as download_router

def create_app(transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """
    transport: optional httpx transport for the shared client (tests pass a MockTransport).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.http_client = build_client(settings, transport=transport)
        logger.info("Upstream registry: {}", settings.base_url)
        try:
            yield
        finally:
            await app.state.http_client.aclose()

    app = FastAPI(title="Registry Proxy API", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Origin", "X-Requested-With", "Content-Type", "Accept"],
    )

    @app.exception_handler(ProxyError)
    async def proxy_error_handler(request: Request, exc: ProxyError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning("Rejected {} {}: {}", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request"})

    app.include_router(health_router)
    app.include_router(search_router)
    app.include_router(download_router)
    return app

app = create_app()
