from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Optional
from apps.chat.models import SessionStatus, MessageSender

# Wire format is camelCase; Python attributes stay snake_case
CAMEL_CONFIG = {
    "from_attributes": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}


class ChatSessionCreate(BaseModel):
    title: Optional[str] = None


class ChatSessionUpdate(BaseModel):
    title: Optional[str] = None


class ChatSessionResponse(BaseModel):
    id: str
    pseudonym_id: str
    title: str
    status: SessionStatus
    crisis_detected: bool
    summary: Optional[str] = None
    started_at: datetime
    last_message_at: datetime

    model_config = CAMEL_CONFIG


class MessageResponse(BaseModel):
    id: int
    session_id: str
    sender: MessageSender
    content: str
    risk_score: int = 0
    context_used: Optional[str] = None
    created_at: datetime

    model_config = CAMEL_CONFIG


class SendMessageRequest(BaseModel):
    # Blank or over-long content is rejected by the service with a 400
    content: Optional[str] = None


class SendMessageResponse(BaseModel):
    user_message: MessageResponse
    ai_message: MessageResponse
    is_locked: Optional[bool] = None

    model_config = CAMEL_CONFIG


class DeleteSessionResponse(BaseModel):
    message: str
