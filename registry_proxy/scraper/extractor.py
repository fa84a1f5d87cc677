"""
Purpose:
- Keyword -> registry search page -> project-info links.
- Only the first result page is read; links come back in document order.
"""

from __future__ import annotations
import re
import httpx
from loguru import logger
from selectolax.parser import HTMLParser, Node
from typing import Callable, Iterator, List, Optional
from urllib.parse import quote, urlencode, urljoin
from ..core.errors import UpstreamError
from ..core.settings import Settings, settings
from .fetcher import DocumentParser, browser_headers, parse_document
from .schema import ProjectLink

SEARCH_FAILED = "Failed to fetch projects from the server"

# Characters encodeURIComponent leaves alone; the registry expects that encoding.
_URI_COMPONENT_SAFE = "-_.!~*'()"

# Browsers drop these around an href, and tab/CR/LF anywhere inside it.
_C0_OR_SPACE = "".join(map(chr, range(0x21)))
_TAB_OR_NEWLINE = re.compile(r"[\t\n\r]")

def build_search_url(keyword: str, cfg: Settings = settings) -> str:
    query = f"{cfg.search_query_param}={quote(keyword, safe=_URI_COMPONENT_SAFE)}"
    if cfg.search_match_params:
        query += "&" + urlencode(cfg.search_match_params)
    return f"{cfg.base_url}{cfg.search_endpoint}?{query}"

def resolve_link(base_url: str, href: str) -> str:
    """Absolute, percent-encoded URL for an href found on a registry page."""
    href = _TAB_OR_NEWLINE.sub("", href).strip(_C0_OR_SPACE)
    return str(httpx.URL(urljoin(base_url, href)))

def is_project_info_link(href: Optional[str], marker: str) -> bool:
    """True if the anchor's href points at a project detail page."""
    return bool(href) and marker in href

def select_anchors(doc: HTMLParser, predicate: Callable[[Optional[str]], bool]) -> Iterator[Node]:
    for node in doc.css("a[href]"):
        if predicate(node.attributes.get("href")):
            yield node

def extract_project_links(doc: HTMLParser, base_url: str, marker: str) -> List[ProjectLink]:
    out: List[ProjectLink] = []
    for node in select_anchors(doc, lambda href: is_project_info_link(href, marker)):
        href = node.attributes["href"]
        # text() keeps inner whitespace between child nodes; trim only the ends
        title = (node.text() or "").strip()
        out.append(ProjectLink(url=resolve_link(base_url, href), title=title))
    return out

async def search_projects(
    keyword: str,
    client: httpx.AsyncClient,
    cfg: Settings = settings,
    parser: DocumentParser = parse_document,
) -> List[ProjectLink]:
    """
    Run one registry search and scrape the project links off the result page.
    Any failure (network, non-2xx, parse) becomes a single UpstreamError.
    """
    logger.info("Searching registry for {!r}", keyword)
    try:
        url = build_search_url(keyword, cfg)
        resp = await client.get(url, headers=browser_headers(cfg))
        resp.raise_for_status()
        doc = parser(resp.text)
        projects = extract_project_links(doc, cfg.base_url, cfg.project_info_marker)
    except Exception as e:
        logger.error("Error fetching projects for {!r}: {!r}", keyword, e)
        raise UpstreamError(SEARCH_FAILED) from e

    logger.info("Found {} project links for {!r}", len(projects), keyword)
    return projects
