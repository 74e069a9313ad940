"""Regression tests for RequestBodyLimitMiddleware."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from crontabls.api.app import create_app
from crontabls.api.deps import init_document_store, reset_document_store
from crontabls.service.document_store import DocumentStore
from crontabls.settings import Settings


@pytest.fixture
def app():
    application = create_app(settings=Settings())
    init_document_store(DocumentStore())
    yield application
    reset_document_store()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestInvalidContentLength:
    """Non-integer Content-Length must not cause a 500."""

    async def test_non_integer_content_length(self, client: AsyncClient) -> None:
        response = await client.post(
            "/health",
            content=b"small body",
            headers={"content-length": "not-a-number"},
        )
        assert response.status_code != 500

    async def test_negative_content_length(self, client: AsyncClient) -> None:
        response = await client.post(
            "/health",
            content=b"small body",
            headers={"content-length": "-1"},
        )
        assert response.status_code != 500


class TestOverLimit:
    async def test_declared_length_over_limit(self, client: AsyncClient) -> None:
        oversized = b"x" * (1 * 1024 * 1024 + 1)
        response = await client.post("/validate", content=oversized)
        assert response.status_code == 413
        assert "too large" in response.json()["detail"]

    async def test_chunked_body_over_default_limit(self, client: AsyncClient) -> None:
        """Body exceeding 1 MB default limit without Content-Length header."""
        oversized = b"x" * (1 * 1024 * 1024 + 1)
        response = await client.post(
            "/documents",
            content=oversized,
            headers={"transfer-encoding": "chunked"},
        )
        assert response.status_code == 413

    async def test_body_under_limit_reaches_handler(self, client: AsyncClient) -> None:
        response = await client.post("/validate", json={"text": "0 0 * * * x"})
        assert response.status_code == 200
        assert response.json()["valid"] is True
