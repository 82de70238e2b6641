# journal service: entry lifecycle on top of the store and mood analyzer
# create persists first, then enriches; enrichment failures never roll back the entry

import logging
from collections import Counter
from typing import Any, Optional

from app.models.journal import AnalysisAnnotation, JournalEntry, JournalEntryCreate, MoodAnalysis
from app.models.insights import InsightsResponse
from app.services.mood_analyzer import MoodAnalyzer, round_half_up
from app.services.storage import Storage, count_words

logger = logging.getLogger(__name__)


class EntryNotFoundError(LookupError):
    """no journal entry with the given id"""

    def __init__(self, entry_id: int):
        super().__init__(f"Journal entry {entry_id} not found")
        self.entry_id = entry_id


def _annotation(analysis: MoodAnalysis) -> AnalysisAnnotation:
    return AnalysisAnnotation(summary=analysis.summary, keywords=list(analysis.keywords))


def _rounded_mean(values: list[int]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


class JournalService:
    """orchestrates the entry store and the mood analyzer"""

    def __init__(self, store: Storage, analyzer: MoodAnalyzer):
        self.store = store
        self.analyzer = analyzer

    async def list_entries(self, user_id: int) -> list[JournalEntry]:
        return await self.store.get_journal_entries_by_user_id(user_id)

    async def recent_entries(self, user_id: int, limit: int) -> list[JournalEntry]:
        return await self.store.get_recent_journal_entries(user_id, limit)

    async def get_entry(self, entry_id: int) -> JournalEntry:
        entry = await self.store.get_journal_entry(entry_id)
        if entry is None:
            raise EntryNotFoundError(entry_id)
        return entry

    async def create_entry(self, data: JournalEntryCreate) -> tuple[JournalEntry, Optional[AnalysisAnnotation]]:
        """persist a new entry, then enrich it with a mood analysis.

        returns the (possibly enriched) entry and the analysis annotation,
        which is None when no analysis ran.
        """
        entry = await self.store.create_journal_entry(data)
        logger.info(f"Journal entry created: {entry.id} for user {entry.user_id}")

        if not entry.content:
            return entry, None

        try:
            analysis = await self.analyzer.analyze(entry.content)
        except Exception:
            # persisted entry stands even if enrichment blew up
            logger.exception(f"Mood analysis raised for entry {entry.id}, returning unanalyzed entry")
            return entry, None

        updated = await self.store.update_journal_entry(entry.id, {
            "mood": entry.mood,
            "content": entry.content,
            "sentiment": analysis.sentiment,
            "energy": analysis.energy,
            "word_count": count_words(entry.content),
        })
        if updated is None:
            # deleted while the analysis was in flight
            logger.warning(f"Journal entry {entry.id} vanished before enrichment was stored")
            return entry, None

        return updated, _annotation(analysis)

    async def update_entry(self, entry_id: int, updates: dict[str, Any]) -> JournalEntry:
        """merge caller-supplied fields, no re-analysis"""
        updated = await self.store.update_journal_entry(entry_id, updates)
        if updated is None:
            raise EntryNotFoundError(entry_id)
        logger.info(f"Journal entry updated: {entry_id} ({', '.join(sorted(updates)) or 'no fields'})")
        return updated

    async def reanalyze_entry(self, entry_id: int) -> tuple[JournalEntry, AnalysisAnnotation]:
        entry = await self.get_entry(entry_id)

        analysis = await self.analyzer.analyze(entry.content)

        updated = await self.store.update_journal_entry(entry_id, {
            "mood": entry.mood,
            "content": entry.content,
            "sentiment": analysis.sentiment,
            "energy": analysis.energy,
            "word_count": count_words(entry.content),
        })
        if updated is None:
            raise EntryNotFoundError(entry_id)

        logger.info(f"Journal entry re-analyzed: {entry_id} (sentiment={analysis.sentiment}, energy={analysis.energy})")
        return updated, _annotation(analysis)

    async def delete_entry(self, entry_id: int) -> None:
        if not await self.store.delete_journal_entry(entry_id):
            raise EntryNotFoundError(entry_id)
        logger.info(f"Journal entry deleted: {entry_id}")

    async def insights(self, user_id: int) -> InsightsResponse:
        """aggregate mood statistics over all of a user's entries"""
        entries = await self.store.get_journal_entries_by_user_id(user_id)

        sentiments = [e.sentiment for e in entries if e.sentiment is not None]
        energies = [e.energy for e in entries if e.energy is not None]

        # Counter keeps first-seen order, so ties go to the most recent mood
        breakdown = Counter(e.mood for e in entries)
        most_common = breakdown.most_common(1)

        return InsightsResponse(
            total_entries=len(entries),
            avg_sentiment=_rounded_mean(sentiments),
            avg_energy=_rounded_mean(energies),
            total_words=sum(e.word_count or 0 for e in entries),
            mood_breakdown=dict(breakdown),
            most_common_mood=most_common[0][0] if most_common else None,
        )
