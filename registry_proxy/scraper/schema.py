"""
Purpose:
- Pydantic models for search in/out so the API is self-documenting and stable.
"""

from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class SearchRequest(BaseModel):
    # Optional here so a missing keyword becomes our 400, not FastAPI's 422
    keyword: Optional[str] = Field(None, description="User's search text")

class ProjectLink(BaseModel):
    model_config = ConfigDict(frozen=True)

    # kept as plain str: HttpUrl would re-normalize what the registry gave us
    url: str
    title: str = ""

class SearchResponse(BaseModel):
    projects: List[ProjectLink] = []

class ErrorResponse(BaseModel):
    error: str
