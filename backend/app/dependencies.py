# fastapi dependency injection
# store and analyzer live on app.state (built in the lifespan), current user is a stub

import logging
from fastapi import Depends, HTTPException, Request, status

from app.config import settings
from app.models.user import User
from app.services.journal_service import JournalService
from app.services.mood_analyzer import MoodAnalyzer
from app.services.storage import Storage

logger = logging.getLogger(__name__)


async def get_store(request: Request) -> Storage:
    """the process-wide entry store"""
    return request.app.state.store


async def get_analyzer(request: Request) -> MoodAnalyzer:
    """the process-wide mood analyzer"""
    return request.app.state.analyzer


async def get_journal_service(
    store: Storage = Depends(get_store),
    analyzer: MoodAnalyzer = Depends(get_analyzer),
) -> JournalService:
    return JournalService(store, analyzer)


async def get_current_user_id() -> int:
    """no auth: every request acts as the configured default user"""
    return settings.DEFAULT_USER_ID


async def get_current_user(
    user_id: int = Depends(get_current_user_id),
    store: Storage = Depends(get_store),
) -> User:
    user = await store.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )
    return user
