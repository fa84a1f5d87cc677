"""
Purpose:
- Shared outbound HTTP plumbing for the registry scraper and the download relay.
- One AsyncClient (connection pool) per process; requests carry a browser User-Agent.
- HTML parsing entry point (selectolax) kept swappable for tests.
"""

from __future__ import annotations
import httpx
from selectolax.parser import HTMLParser
from typing import Callable, Dict, Optional, Union
from ..core.settings import Settings, settings

# parse(html) -> traversable document
DocumentParser = Callable[[Union[str, bytes]], HTMLParser]

def browser_headers(cfg: Settings = settings) -> Dict[str, str]:
    return {"User-Agent": cfg.user_agent}

def build_client(
    cfg: Settings = settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Build the process-wide AsyncClient.
    - timeout comes from settings (None = unbounded, like the old server)
    - redirects are followed so registry attachment links land on the file itself
    """
    return httpx.AsyncClient(
        headers=browser_headers(cfg),
        timeout=cfg.upstream_timeout,
        follow_redirects=True,
        transport=transport,
    )

def parse_document(html: Union[str, bytes]) -> HTMLParser:
    return HTMLParser(html)
