# Common language: Environment/ops probe that surfaces version pins and the upstream config.
# Use this before/after upgrades to confirm no silent drift.

from fastapi import APIRouter
from ..core.settings import settings
import sys, importlib

router = APIRouter(tags=["health"])

def _ver(modname: str) -> str:
    try:
        m = importlib.import_module(modname)
        return getattr(m, "__version__", "unknown")
    except ImportError:
        return "not-installed"

@router.get("/healthz")
def healthz():
    return {
        "status": "ok",
        "python": sys.version.split()[0],
        "versions": {
            "fastapi": _ver("fastapi"),
            "uvicorn": _ver("uvicorn"),
            "pydantic_settings": _ver("pydantic_settings"),
            "httpx": _ver("httpx"),
            "selectolax": _ver("selectolax"),
            "loguru": _ver("loguru"),
        },
        "config": {
            "base_url": settings.base_url,
            "search_endpoint": settings.search_endpoint,
            "project_info_marker": settings.project_info_marker,
            "upstream_timeout": settings.upstream_timeout,
        },
    }
