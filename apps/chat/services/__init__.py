from .ai_client import AIResponseClient, build_history
from .chat_service import ChatService, SendMessageResult
from .crisis_detector import CrisisAssessment, CrisisDetector
from .message_store import MessageStore
from .session_store import SessionStore
from .state_machine import SessionStateMachine

__all__ = [
    "AIResponseClient",
    "build_history",
    "ChatService",
    "SendMessageResult",
    "CrisisAssessment",
    "CrisisDetector",
    "MessageStore",
    "SessionStore",
    "SessionStateMachine",
]
