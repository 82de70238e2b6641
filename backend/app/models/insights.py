# insights models: aggregate mood statistics for the dashboard

from typing import Optional
from pydantic import BaseModel, Field


class InsightsResponse(BaseModel):
    """summary statistics over a user's journal entries"""
    total_entries: int = Field(0, alias="totalEntries")
    avg_sentiment: int = Field(0, alias="avgSentiment")
    avg_energy: int = Field(0, alias="avgEnergy")
    total_words: int = Field(0, alias="totalWords")
    mood_breakdown: dict[str, int] = Field(default_factory=dict, alias="moodBreakdown")
    most_common_mood: Optional[str] = Field(None, alias="mostCommonMood")

    model_config = {"populate_by_name": True}
