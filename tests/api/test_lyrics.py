"""Tests for GET /api/lyrics."""

import httpx
from httpx import AsyncClient

from app.api.dependencies import get_http_client
from app.main import app


def _upstream(handler) -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_http_client] = lambda: http


async def test_lyrics_returned_verbatim(client: AsyncClient) -> None:
    payload = {"lyrics": "Waterloo, I was defeated, you won the war", "track": "Waterloo"}
    _upstream(lambda request: httpx.Response(200, json=payload))

    response = await client.get("/api/lyrics", params={"title": "Waterloo", "artist": "ABBA"})

    assert response.status_code == 200
    assert response.json() == payload


async def test_missing_title_is_400(client: AsyncClient) -> None:
    response = await client.get("/api/lyrics")

    assert response.status_code == 400
    assert response.json()["message"] == "Missing title"


async def test_upstream_failure_is_500(client: AsyncClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    _upstream(handler)

    response = await client.get("/api/lyrics", params={"title": "Waterloo"})

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to fetch lyrics"
