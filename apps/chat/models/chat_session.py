from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from uuid import uuid4
from enum import Enum

from apps.chat.models.timestamps import utc_column, utcnow


class SessionStatus(str, Enum):
    ACTIVE = "active"
    LOCKED = "locked"
    ARCHIVED = "archived"
    COMPLETED = "completed"


class ChatSession(SQLModel, table=True):
    __tablename__ = "chat_sessions"

    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    # Opaque pseudonym, deliberately not a foreign key to any account table
    pseudonym_id: str = Field(index=True, max_length=255)
    title: str = Field(default="New Conversation", max_length=100)
    status: SessionStatus = Field(default=SessionStatus.ACTIVE)
    crisis_detected: bool = Field(default=False)
    summary: Optional[str] = Field(default=None, max_length=2000)
    started_at: datetime = Field(default_factory=utcnow, sa_column=utc_column())
    last_message_at: datetime = Field(default_factory=utcnow, sa_column=utc_column(index=True))

    def __repr__(self):
        return f"<ChatSession {self.id} ({self.status.value})>"

    @property
    def is_locked(self) -> bool:
        return self.status == SessionStatus.LOCKED
