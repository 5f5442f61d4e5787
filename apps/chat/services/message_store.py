from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from typing import List, Optional

from apps.chat.errors import handle_persistence_errors, ValidationError
from apps.chat.models import Message, MessageSender

CONTENT_MAX_LENGTH = 10000


class MessageStore:
    """Persistence for chat messages. Messages are append-only."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _validate(self, message: Message) -> None:
        if not message.session_id:
            raise ValidationError("Message must belong to a session", parameter="session_id")
        if not message.content or not message.content.strip():
            raise ValidationError("Message content is required", parameter="content")
        if len(message.content) > CONTENT_MAX_LENGTH:
            raise ValidationError("Message content too long", parameter="content")
        if not isinstance(message.sender, MessageSender):
            message.sender = MessageSender(message.sender)
        if not 0 <= message.risk_score <= 100:
            raise ValidationError(
                "Risk score out of range", parameter="risk_score", received=str(message.risk_score)
            )

    @handle_persistence_errors("message.create")
    async def create(self, message: Message) -> Message:
        """Append a message to its session"""
        self._validate(message)
        self.db.add(message)
        await self.db.commit()
        await self.db.refresh(message)
        return message

    @handle_persistence_errors("message.list")
    async def list_by_session(
        self,
        session_id: str,
        ascending: bool = True,
        limit: Optional[int] = None
    ) -> List[Message]:
        """Messages of a session ordered by creation time"""
        query = select(Message).where(Message.session_id == session_id)
        if ascending:
            query = query.order_by(Message.created_at.asc(), Message.id.asc())
        else:
            query = query.order_by(Message.created_at.desc(), Message.id.desc())
        if limit is not None:
            query = query.limit(limit)

        result = await self.db.execute(query)
        return list(result.scalars().all())

    @handle_persistence_errors("message.recent")
    async def recent(self, session_id: str, limit: int) -> List[Message]:
        """
        The ``limit`` most recent messages, in chronological order.

        The read transaction is closed before returning so the connection goes
        back to the pool while the caller waits on the AI responder.
        """
        latest = await self.list_by_session(session_id, ascending=False, limit=limit)
        await self.db.commit()
        latest.reverse()
        return latest

    @handle_persistence_errors("message.delete_by_session")
    async def delete_by_session(self, session_id: str) -> int:
        """Delete every message of a session, returning how many were removed"""
        result = await self.db.execute(
            delete(Message).where(Message.session_id == session_id)
        )
        await self.db.commit()
        return result.rowcount
