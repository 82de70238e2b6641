# journal router: crud over journal entries plus explicit mood re-analysis
# all entries belong to the current (stub) user

import logging
import re

from fastapi import APIRouter, Depends, HTTPException, Response, status

from app.config import settings
from app.dependencies import get_current_user_id, get_journal_service
from app.models.journal import (
    AnalyzeResponse,
    JournalEntry,
    JournalEntryCreate,
    JournalEntryCreatedResponse,
    JournalEntryUpdate,
)
from app.services.journal_service import EntryNotFoundError, JournalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/journal", tags=["journal"])

NOT_FOUND_DETAIL = "Journal entry not found"

LEADING_INT_PATTERN = re.compile(r"\s*[+-]?\d+")


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=NOT_FOUND_DETAIL,
    )


def _parse_limit(raw: str) -> int:
    """recent limit from the path, read from its leading digits ("2abc" is 2).
    non-numeric or zero falls back to the default."""
    match = LEADING_INT_PATTERN.match(raw)
    if not match:
        return settings.RECENT_ENTRIES_DEFAULT_LIMIT
    return int(match.group(0)) or settings.RECENT_ENTRIES_DEFAULT_LIMIT


@router.get("", response_model=list[JournalEntry])
async def list_entries(
    user_id: int = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service),
):
    """all entries for the current user, most recent first"""
    return await service.list_entries(user_id)


@router.get("/recent/{limit}", response_model=list[JournalEntry])
async def recent_entries(
    limit: str,
    user_id: int = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service),
):
    """the n most recent entries for the current user"""
    return await service.recent_entries(user_id, _parse_limit(limit))


@router.get("/{entry_id}", response_model=JournalEntry)
async def get_entry(
    entry_id: int,
    service: JournalService = Depends(get_journal_service),
):
    try:
        return await service.get_entry(entry_id)
    except EntryNotFoundError:
        raise _not_found()


@router.post("", response_model=JournalEntryCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: JournalEntryCreate,
    service: JournalService = Depends(get_journal_service),
):
    """create an entry and analyze its mood.

    analysis is best-effort: if the provider is down the entry still gets
    created with fallback scores.
    """
    entry, analysis = await service.create_entry(body)
    return JournalEntryCreatedResponse(**entry.model_dump(), analysis=analysis)


@router.put("/{entry_id}", response_model=JournalEntry)
async def update_entry(
    entry_id: int,
    body: JournalEntryUpdate,
    service: JournalService = Depends(get_journal_service),
):
    """merge the supplied fields into an entry. does not re-run analysis."""
    updates = body.model_dump(exclude_unset=True)
    try:
        return await service.update_entry(entry_id, updates)
    except EntryNotFoundError:
        raise _not_found()


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: int,
    service: JournalService = Depends(get_journal_service),
):
    try:
        await service.delete_entry(entry_id)
    except EntryNotFoundError:
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{entry_id}/analyze", response_model=AnalyzeResponse)
async def analyze_entry(
    entry_id: int,
    service: JournalService = Depends(get_journal_service),
):
    """re-run mood analysis on an existing entry"""
    try:
        entry, analysis = await service.reanalyze_entry(entry_id)
    except EntryNotFoundError:
        raise _not_found()
    return AnalyzeResponse(entry=entry, analysis=analysis)
