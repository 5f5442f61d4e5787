from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from datetime import datetime
from typing import Optional, List
from uuid import uuid4
from enum import Enum

from apps.chat.models.timestamps import utc_column, utcnow


class JournalMood(str, Enum):
    HAPPY = "happy"
    GRATEFUL = "grateful"
    CALM = "calm"
    ANXIOUS = "anxious"
    SAD = "sad"
    ANGRY = "angry"
    HOPEFUL = "hopeful"
    REFLECTIVE = "reflective"


class JournalEntry(SQLModel, table=True):
    __tablename__ = "journal_entries"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    pseudonym_id: str = Field(index=True, max_length=255)
    title: str = Field(default="Untitled Entry", max_length=200)
    content: str = Field(max_length=10000)
    mood: Optional[JournalMood] = Field(default=None)
    tags: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=utc_column(index=True))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=utc_column())

    def __repr__(self):
        return f"<JournalEntry {self.id} ({self.title})>"
