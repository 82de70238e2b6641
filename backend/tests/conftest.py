# shared fixtures for backend api tests
# provides a fresh in-memory store, a mood analyzer with a mocked gemini chain,
# and an httpx test client wired to both

import json

import pytest
import pytest_asyncio
from unittest.mock import AsyncMock, MagicMock

from httpx import AsyncClient, ASGITransport

from app.main import app
from app.dependencies import get_store, get_analyzer
from app.models.journal import JournalEntryCreate
from app.services.mood_analyzer import MoodAnalyzer
from app.services.storage import MemStorage, seed_default_user


DEFAULT_USER_ID = 1
OTHER_USER_ID = 2

# a well-formed gemini reply, wrapped in a code fence like the model tends to do
GOOD_REPLY = "```json\n" + json.dumps({
    "sentiment": 82,
    "energy": 67,
    "summary": "The writer feels upbeat and energized after a productive day.",
    "keywords": ["joy", "productivity", "gratitude"],
}) + "\n```"


def make_chain(reply=GOOD_REPLY, side_effect=None):
    """mock langchain runnable: ainvoke(dict) -> str"""
    chain = MagicMock()
    chain.ainvoke = AsyncMock(return_value=reply, side_effect=side_effect)
    return chain


async def add_entries(store, count, user_id=DEFAULT_USER_ID, mood="neutral"):
    """create count entries with distinct content, returns them oldest first"""
    entries = []
    for i in range(count):
        entry = await store.create_journal_entry(
            JournalEntryCreate(mood=mood, content=f"entry number {i + 1}", user_id=user_id)
        )
        entries.append(entry)
    return entries


@pytest_asyncio.fixture
async def store():
    """fresh store per test, seeded with the default user"""
    s = MemStorage()
    await seed_default_user(s, "test", "password")
    return s


@pytest.fixture
def llm_chain():
    return make_chain()


@pytest.fixture
def analyzer(llm_chain):
    return MoodAnalyzer(chain=llm_chain, api_key="test-key", timeout=1.0)


@pytest.fixture
def failing_analyzer():
    """analyzer whose provider call always errors out"""
    return MoodAnalyzer(chain=make_chain(side_effect=RuntimeError("provider down")), api_key="test-key", timeout=1.0)


def _override(store, analyzer):
    async def override_get_store():
        return store

    async def override_get_analyzer():
        return analyzer

    app.dependency_overrides[get_store] = override_get_store
    app.dependency_overrides[get_analyzer] = override_get_analyzer


@pytest_asyncio.fixture
async def client(store, analyzer):
    """httpx async test client with the store and analyzer overridden"""
    _override(store, analyzer)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def failing_client(store, failing_analyzer):
    """client whose mood analysis always falls back"""
    _override(store, failing_analyzer)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
