from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from uuid import uuid4
from enum import Enum

from apps.chat.models.timestamps import utc_column, utcnow


class Emotion(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANXIOUS = "anxious"
    ANGRY = "angry"
    NEUTRAL = "neutral"
    STRESSED = "stressed"
    EXCITED = "excited"


class MoodLog(SQLModel, table=True):
    __tablename__ = "mood_logs"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    pseudonym_id: str = Field(index=True, max_length=255)
    emotion: Emotion
    intensity: int = Field(ge=1, le=10)
    note: Optional[str] = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utcnow, sa_column=utc_column(index=True))
