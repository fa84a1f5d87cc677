"""
Purpose:
- Expose POST /api/search: keyword in, registry project links out.
"""

from fastapi import APIRouter, Depends
import httpx
from ..core.errors import InvalidInputError
from ..scraper.schema import ErrorResponse, SearchRequest, SearchResponse
from ..scraper.extractor import search_projects
from .deps import get_http_client

router = APIRouter(prefix="/api", tags=["search"])

@router.post(
    "/search",
    response_model=SearchResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def search(payload: SearchRequest, client: httpx.AsyncClient = Depends(get_http_client)):
    # Blank keywords never reach the registry
    if not payload.keyword or not payload.keyword.strip():
        raise InvalidInputError("Keyword is required")
    projects = await search_projects(payload.keyword, client)
    return SearchResponse(projects=projects)
