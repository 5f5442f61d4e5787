from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from apps.chat.db import get_chat_db
from apps.wellness.schemas.mood import MoodLogCreate, MoodLogRead
from apps.wellness.services import MoodService
from core.auth.dependencies import get_current_pseudonym

router = APIRouter()


async def get_mood_service(db: AsyncSession = Depends(get_chat_db)) -> MoodService:
    """Dependency to get mood service"""
    return MoodService(db)


@router.post("", response_model=MoodLogRead, status_code=status.HTTP_201_CREATED)
async def log_mood(
    mood_data: MoodLogCreate,
    pseudonym_id: str = Depends(get_current_pseudonym),
    mood_service: MoodService = Depends(get_mood_service)
):
    """
    Log a new mood

    - **emotion**: One of happy, sad, anxious, angry, neutral, stressed, excited
    - **intensity**: 1 to 10
    - **note**: Optional note
    """
    return await mood_service.log_mood(pseudonym_id, mood_data)


@router.get("/history", response_model=List[MoodLogRead])
async def get_mood_history(
    pseudonym_id: str = Depends(get_current_pseudonym),
    mood_service: MoodService = Depends(get_mood_service)
):
    """Get the caller's mood history, newest first"""
    return await mood_service.get_history(pseudonym_id)
