# Import all models so SQLAlchemy can discover them
from .chat_session import ChatSession, SessionStatus
from .message import Message, MessageSender

__all__ = ["ChatSession", "SessionStatus", "Message", "MessageSender"]
