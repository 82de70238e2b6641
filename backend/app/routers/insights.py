# insights router: aggregate mood stats for the dashboard charts

import logging
from fastapi import APIRouter, Depends

from app.dependencies import get_current_user_id, get_journal_service
from app.models.insights import InsightsResponse
from app.services.journal_service import JournalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/insights", tags=["insights"])


@router.get("", response_model=InsightsResponse)
async def get_insights(
    user_id: int = Depends(get_current_user_id),
    service: JournalService = Depends(get_journal_service),
):
    """entry count, average sentiment/energy, word total and mood breakdown"""
    return await service.insights(user_id)
