"""
Purpose:
- FastAPI dependencies shared by the routers.
- The AsyncClient lives on app.state (opened/closed by the app lifespan).
"""

import httpx
from fastapi import Request

def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client
