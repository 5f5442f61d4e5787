from typing import Dict, FrozenSet

from apps.chat.errors import ForbiddenError
from apps.chat.models import ChatSession, SessionStatus

LOCKED_MESSAGE = "This session is locked due to safety concerns. Please contact emergency services."


class SessionStateMachine:
    """
    Legal session states and transitions.

    Active is the initial state. Locked is entered only from Active through the
    crisis path and left only through an owner unlock. Archived and Completed
    exist for future lifecycle operations and have no transitions yet. Deletion
    is allowed from any state and is not modelled as a status.
    """

    TRANSITIONS: Dict[SessionStatus, FrozenSet[SessionStatus]] = {
        SessionStatus.ACTIVE: frozenset({SessionStatus.LOCKED}),
        SessionStatus.LOCKED: frozenset({SessionStatus.ACTIVE}),
        SessionStatus.ARCHIVED: frozenset(),
        SessionStatus.COMPLETED: frozenset(),
    }

    @classmethod
    def can_transition(cls, current: SessionStatus, target: SessionStatus) -> bool:
        return target in cls.TRANSITIONS.get(current, frozenset())

    @staticmethod
    def ensure_can_send(session: ChatSession) -> None:
        """Guard for SendMessage: a locked session accepts nothing."""
        if session.is_locked:
            raise ForbiddenError(LOCKED_MESSAGE, session_id=session.id)

    @classmethod
    def lock_changes(cls, session: ChatSession) -> Dict[str, object]:
        """
        Column values for Active -> Locked, raised by the crisis circuit breaker.

        The session object is left untouched; the caller writes these values
        with a conditional update so a concurrent lock cannot be lost.
        """
        if not cls.can_transition(session.status, SessionStatus.LOCKED):
            raise ForbiddenError(
                "Session cannot be locked from its current state",
                details=f"status={session.status.value}",
                session_id=session.id,
            )
        return {"status": SessionStatus.LOCKED, "crisis_detected": True}

    @classmethod
    def unlock(cls, session: ChatSession) -> bool:
        """
        Locked -> Active on explicit owner request; clears the crisis flag.

        Returns True if the status changed. Unlocking an Active session is a
        no-op, so repeated unlocks are safe.
        """
        if session.status == SessionStatus.ACTIVE:
            session.crisis_detected = False
            return False
        if not cls.can_transition(session.status, SessionStatus.ACTIVE):
            raise ForbiddenError(
                "Session cannot be unlocked from its current state",
                details=f"status={session.status.value}",
                session_id=session.id,
            )
        session.status = SessionStatus.ACTIVE
        session.crisis_detected = False
        return True
