from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from typing import List, Optional

from apps.chat.errors import handle_persistence_errors, ValidationError
from apps.chat.models import ChatSession, SessionStatus

TITLE_MAX_LENGTH = 100


class SessionStore:
    """Persistence for chat-session records."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _validate(self, session: ChatSession) -> None:
        if not session.pseudonym_id:
            raise ValidationError("Session owner is required", parameter="pseudonym_id")
        if not isinstance(session.status, SessionStatus):
            session.status = SessionStatus(session.status)
        if session.title and len(session.title) > TITLE_MAX_LENGTH:
            session.title = session.title[:TITLE_MAX_LENGTH]

    @handle_persistence_errors("session.create")
    async def create(self, session: ChatSession) -> ChatSession:
        """Insert a new session"""
        self._validate(session)
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        return session

    @handle_persistence_errors("session.get")
    async def get(self, session_id: str) -> Optional[ChatSession]:
        """Get a session by id, regardless of owner"""
        result = await self.db.execute(
            select(ChatSession).where(ChatSession.id == session_id)
        )
        return result.scalar_one_or_none()

    @handle_persistence_errors("session.list")
    async def list_by_owner(self, pseudonym_id: str) -> List[ChatSession]:
        """All sessions of an owner, most recently active first"""
        result = await self.db.execute(
            select(ChatSession)
            .where(ChatSession.pseudonym_id == pseudonym_id)
            .order_by(ChatSession.last_message_at.desc())
        )
        return list(result.scalars().all())

    @handle_persistence_errors("session.save")
    async def save(self, session: ChatSession) -> ChatSession:
        """Persist changes made to a loaded session"""
        self._validate(session)
        self.db.add(session)
        await self.db.commit()
        await self.db.refresh(session)
        return session

    @handle_persistence_errors("session.update_status_if")
    async def update_status_if(
        self,
        session: ChatSession,
        expected: SessionStatus,
        **values,
    ) -> bool:
        """
        Compare-and-swap on status.

        Writes the given column values only if the stored
        status still equals ``expected``. Returns False when another request
        changed the status first. The passed-in session is refreshed either way.
        """
        result = await self.db.execute(
            update(ChatSession)
            .where(ChatSession.id == session.id)
            .where(ChatSession.status == expected)
            .values(**values)
        )
        await self.db.commit()
        await self.db.refresh(session)
        return result.rowcount == 1

    @handle_persistence_errors("session.delete")
    async def delete(self, session: ChatSession) -> None:
        """Delete a session record (messages are removed by MessageStore)"""
        await self.db.delete(session)
        await self.db.commit()
