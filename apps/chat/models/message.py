from sqlmodel import SQLModel, Field
from datetime import datetime
from typing import Optional
from enum import Enum

from apps.chat.models.timestamps import utc_column, utcnow


class MessageSender(str, Enum):
    USER = "user"
    AI = "ai"
    SYSTEM = "system"


class Message(SQLModel, table=True):
    __tablename__ = "messages"

    # Integer key doubles as the insertion sequence for stable ordering
    id: Optional[int] = Field(default=None, primary_key=True)
    session_id: str = Field(foreign_key="chat_sessions.id", index=True)
    sender: MessageSender = Field(default=MessageSender.USER)
    content: str = Field(max_length=10000)
    risk_score: int = Field(default=0, ge=0, le=100)

    # Retrieval context for this message, reserved for future use
    context_used: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_column=utc_column())

    def __repr__(self):
        return f"<Message {self.id} {self.sender.value} (session: {self.session_id})>"
