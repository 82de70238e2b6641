# tests for the health check, app configuration and error handlers
# basic app-level tests

import pytest
from unittest.mock import patch, AsyncMock

from httpx import AsyncClient, ASGITransport

from app.main import app, lifespan
from app.services.storage import MemStorage


class TestHealthCheck:
    """app health and config"""

    async def test_health_check(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "moodjournal-api"

    async def test_openapi_schema(self, client):
        resp = await client.get("/openapi.json")
        assert resp.status_code == 200
        schema = resp.json()
        assert schema["info"]["title"] == "MoodJournal API"
        assert "/journal/{entry_id}/analyze" in schema["paths"]

    async def test_docs_available(self, client):
        resp = await client.get("/docs")
        assert resp.status_code == 200


class TestLifespan:
    """startup builds a store with the seed user"""

    async def test_lifespan_seeds_default_user(self):
        async with lifespan(app):
            assert isinstance(app.state.store, MemStorage)
            user = await app.state.store.get_user(1)
            assert user is not None
            assert user.username == "test"
            assert app.state.analyzer is not None


class TestErrorHandlers:
    """validation errors are 400, unexpected errors a generic 500"""

    async def test_validation_error_is_400_with_message(self, client):
        resp = await client.post("/journal", json={"mood": "ecstatic", "content": "hi", "userId": 1})
        assert resp.status_code == 400
        detail = resp.json()["detail"]
        assert detail.startswith("Validation error")
        assert "mood" in detail

    async def test_non_integer_id_is_400(self, client):
        resp = await client.get("/journal/abc")
        assert resp.status_code == 400

    async def test_unexpected_error_is_generic_500(self, client, store):
        with patch.object(store, "get_journal_entries_by_user_id", new=AsyncMock(side_effect=RuntimeError("boom"))):
            transport = ASGITransport(app=app, raise_app_exceptions=False)
            async with AsyncClient(transport=transport, base_url="http://test") as ac:
                resp = await ac.get("/journal")
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal server error"}
