import logging
from dataclasses import dataclass
from typing import List, Optional

from apps.chat.config import ChatSettings
from apps.chat.errors import ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
from apps.chat.models import ChatSession, Message, MessageSender
from apps.chat.models.timestamps import utcnow
from apps.chat.services.ai_client import AIResponseClient, build_history
from apps.chat.services.crisis_detector import CrisisDetector
from apps.chat.services.message_store import MessageStore
from apps.chat.services.session_store import SessionStore
from apps.chat.services.state_machine import LOCKED_MESSAGE, SessionStateMachine

logger = logging.getLogger(__name__)


@dataclass
class SendMessageResult:
    user_message: Message
    ai_message: Message
    is_locked: bool = False


class ChatService:
    """
    Session lifecycle and message exchange.

    The crisis check runs before the AI client is touched: a message with risk
    language locks the session and is answered with the safety text instead.
    Every session-scoped operation verifies the caller's pseudonym first.
    """

    def __init__(
        self,
        sessions: SessionStore,
        messages: MessageStore,
        detector: CrisisDetector,
        ai_client: AIResponseClient,
        settings: ChatSettings,
    ):
        self.sessions = sessions
        self.messages = messages
        self.detector = detector
        self.ai_client = ai_client
        self.settings = settings

    async def _load_owned(self, owner: str, session_id: str) -> ChatSession:
        session = await self.sessions.get(session_id)
        if session is None:
            raise NotFoundError("Session not found", resource_id=session_id)
        if session.pseudonym_id != owner:
            raise UnauthorizedError("Not authorized to access this session")
        return session

    def _clean_title(self, title: Optional[str]) -> Optional[str]:
        if title is None or not title.strip():
            return None
        return title.strip()[: self.settings.TITLE_MAX_LENGTH]

    def _derive_title(self, text: str) -> str:
        limit = self.settings.AUTO_TITLE_LENGTH
        if len(text) > limit:
            return text[:limit] + "..."
        return text

    async def start_session(self, owner: str, title: Optional[str] = None) -> ChatSession:
        """Create an Active session and its system greeting"""
        session = ChatSession(
            pseudonym_id=owner,
            title=self._clean_title(title) or self.settings.DEFAULT_TITLE,
        )
        session = await self.sessions.create(session)

        await self.messages.create(Message(
            session_id=session.id,
            sender=MessageSender.SYSTEM,
            content=self.settings.GREETING_MESSAGE,
        ))

        logger.info(f"Session {session.id} started")
        return session

    async def list_sessions(self, owner: str) -> List[ChatSession]:
        return await self.sessions.list_by_owner(owner)

    async def get_messages(self, owner: str, session_id: str) -> List[Message]:
        await self._load_owned(owner, session_id)
        return await self.messages.list_by_session(session_id, ascending=True)

    async def send_message(self, owner: str, session_id: str, text: Optional[str]) -> SendMessageResult:
        session = await self._load_owned(owner, session_id)
        SessionStateMachine.ensure_can_send(session)

        if text is None or not text.strip():
            raise ValidationError("Message content is required", parameter="content")
        if len(text) > self.settings.MESSAGE_MAX_LENGTH:
            raise ValidationError(
                f"Message must be at most {self.settings.MESSAGE_MAX_LENGTH} characters", parameter="content"
            )

        assessment = self.detector.detect(text)
        if assessment.is_crisis:
            return await self._handle_crisis(session, text, assessment.safety_message, assessment.matched_keyword)

        user_message = await self.messages.create(Message(
            session_id=session.id,
            sender=MessageSender.USER,
            content=text,
        ))

        session.last_message_at = utcnow()
        if session.title == self.settings.DEFAULT_TITLE:
            session.title = self._derive_title(text)
        session = await self.sessions.save(session)

        recent = await self.messages.recent(session.id, self.settings.AI_HISTORY_LIMIT)
        reply = await self.ai_client.get_response(text, build_history(recent))

        ai_message = await self.messages.create(Message(
            session_id=session.id,
            sender=MessageSender.AI,
            content=reply,
        ))
        return SendMessageResult(user_message=user_message, ai_message=ai_message)

    async def _handle_crisis(
        self,
        session: ChatSession,
        text: str,
        safety_message: str,
        matched_keyword: Optional[str],
    ) -> SendMessageResult:
        expected = session.status
        changes = SessionStateMachine.lock_changes(session)
        swapped = await self.sessions.update_status_if(
            session, expected, last_message_at=utcnow(), **changes
        )
        if not swapped:
            # Another request moved the session out of Active first
            raise ForbiddenError(LOCKED_MESSAGE, session_id=session.id)

        logger.warning(f"Crisis language detected in session {session.id} (keyword: '{matched_keyword}'), session locked")

        user_message = await self.messages.create(Message(
            session_id=session.id,
            sender=MessageSender.USER,
            content=text,
            risk_score=100,
        ))
        safety = await self.messages.create(Message(
            session_id=session.id,
            sender=MessageSender.SYSTEM,
            content=safety_message,
        ))
        return SendMessageResult(user_message=user_message, ai_message=safety, is_locked=True)

    async def unlock_session(self, owner: str, session_id: str) -> ChatSession:
        session = await self._load_owned(owner, session_id)
        changed = SessionStateMachine.unlock(session)
        session = await self.sessions.save(session)
        if changed:
            logger.info(f"Session {session_id} unlocked by owner")
        return session

    async def delete_session(self, owner: str, session_id: str) -> None:
        session = await self._load_owned(owner, session_id)
        removed = await self.messages.delete_by_session(session_id)
        await self.sessions.delete(session)
        logger.info(f"Session {session_id} deleted with {removed} messages")

    async def rename_session(self, owner: str, session_id: str, title: Optional[str]) -> ChatSession:
        session = await self._load_owned(owner, session_id)
        new_title = self._clean_title(title)
        if new_title is not None:
            session.title = new_title
            session = await self.sessions.save(session)
        return session
