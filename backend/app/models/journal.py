# journal models: entry creation, update, and response schemas
# mirrors frontend shared schema JournalEntry / MoodAnalysis

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, model_validator

Mood = Literal["happy", "calm", "neutral", "tired", "sad"]


class JournalEntry(BaseModel):
    """a stored journal entry, as held by the entry store"""
    id: int
    date: datetime
    mood: str
    content: str
    user_id: int = Field(..., alias="userId")
    sentiment: Optional[int] = None
    energy: Optional[int] = None
    word_count: Optional[int] = Field(None, alias="wordCount")

    model_config = {"populate_by_name": True}


class JournalEntryCreate(BaseModel):
    """payload for a new journal entry"""
    mood: Mood = Field(..., description="self-reported mood")
    content: str = Field(..., description="entry text, html allowed")
    user_id: int = Field(..., alias="userId", strict=True, description="owner of the entry")

    model_config = {"populate_by_name": True}


class JournalEntryUpdate(BaseModel):
    """partial update: only fields present in the payload are merged"""
    mood: Optional[Mood] = None
    content: Optional[str] = None
    sentiment: Optional[int] = Field(None, ge=0, le=100)
    energy: Optional[int] = Field(None, ge=0, le=100)
    word_count: Optional[int] = Field(None, alias="wordCount", ge=0)

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _mood_and_content_not_null(self):
        # sentiment/energy/wordCount may be cleared, mood and content may not
        for name in ("mood", "content"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class MoodAnalysis(BaseModel):
    """normalized result of a mood analysis call"""
    sentiment: int = Field(..., ge=0, le=100)
    energy: int = Field(..., ge=0, le=100)
    summary: str
    keywords: list[str] = Field(default_factory=list, max_length=5)


class AnalysisAnnotation(BaseModel):
    """ephemeral analysis details returned alongside an entry, never stored"""
    summary: str
    keywords: list[str] = Field(default_factory=list)


class JournalEntryCreatedResponse(JournalEntry):
    """created entry, with the analysis annotation when enrichment ran"""
    analysis: Optional[AnalysisAnnotation] = None


class AnalyzeResponse(BaseModel):
    """response for an explicit re-analysis"""
    entry: JournalEntry
    analysis: AnalysisAnnotation
