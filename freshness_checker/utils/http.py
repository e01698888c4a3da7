import httpx
from fastapi import Request

from freshness_checker.config import get_settings


def create_http_client() -> httpx.AsyncClient:
    settings = get_settings()
    return httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"Accept": "application/json"},
    )


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Shared outbound client, opened and closed with the app lifespan."""
    return request.app.state.http_client
