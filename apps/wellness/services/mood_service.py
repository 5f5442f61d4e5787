from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import List

from apps.chat.errors import handle_persistence_errors
from apps.wellness.models import MoodLog
from apps.wellness.schemas.mood import MoodLogCreate


class MoodService:
    def __init__(self, db: AsyncSession):
        self.db = db

    @handle_persistence_errors("mood.create")
    async def log_mood(self, pseudonym_id: str, mood_data: MoodLogCreate) -> MoodLog:
        """Record a mood entry for the caller"""
        mood_log = MoodLog(pseudonym_id=pseudonym_id, **mood_data.model_dump())
        self.db.add(mood_log)
        await self.db.commit()
        await self.db.refresh(mood_log)
        return mood_log

    @handle_persistence_errors("mood.history")
    async def get_history(self, pseudonym_id: str) -> List[MoodLog]:
        """All of the caller's mood logs, newest first"""
        result = await self.db.execute(
            select(MoodLog)
            .where(MoodLog.pseudonym_id == pseudonym_id)
            .order_by(MoodLog.created_at.desc())
        )
        return list(result.scalars().all())
