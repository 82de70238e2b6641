# tests for the insights router: aggregate mood stats for the current user

from tests.conftest import OTHER_USER_ID, add_entries


class TestInsights:
    """GET /insights"""

    async def test_insights_empty(self, client):
        resp = await client.get("/insights")
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalEntries"] == 0
        assert data["mostCommonMood"] is None
        assert data["moodBreakdown"] == {}

    async def test_insights_after_creating_entries(self, client, store):
        for mood in ("happy", "happy", "sad"):
            resp = await client.post("/journal", json={"mood": mood, "content": "Great day today", "userId": 1})
            assert resp.status_code == 201
        await add_entries(store, 4, user_id=OTHER_USER_ID)

        data = (await client.get("/insights")).json()
        assert data["totalEntries"] == 3
        assert data["avgSentiment"] == 82
        assert data["avgEnergy"] == 67
        assert data["totalWords"] == 9
        assert data["moodBreakdown"] == {"happy": 2, "sad": 1}
        assert data["mostCommonMood"] == "happy"
