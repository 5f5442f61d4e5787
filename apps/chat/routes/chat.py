from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional

from apps.chat.config import get_chat_settings
from apps.chat.db import get_chat_db
from apps.chat.schemas.chat import (
    ChatSessionCreate, ChatSessionUpdate, ChatSessionResponse,
    MessageResponse, SendMessageRequest, SendMessageResponse,
    DeleteSessionResponse
)
from apps.chat.services import (
    AIResponseClient, ChatService, CrisisDetector, MessageStore, SessionStore
)
from core.auth.dependencies import get_current_pseudonym

router = APIRouter()


def get_crisis_detector() -> CrisisDetector:
    """Dependency to get the crisis detector"""
    settings = get_chat_settings()
    return CrisisDetector(settings.CRISIS_KEYWORDS, settings.SAFETY_MESSAGE)


def get_ai_client() -> AIResponseClient:
    """Dependency to get the AI responder client"""
    settings = get_chat_settings()
    return AIResponseClient(
        base_url=settings.AI_SERVICE_URL,
        fallback_response=settings.FALLBACK_RESPONSE,
        listening_prompt=settings.LISTENING_PROMPT,
        timeout=settings.AI_TIMEOUT_SECONDS,
        max_attempts=settings.AI_MAX_ATTEMPTS,
        base_delay=settings.AI_RETRY_BASE_DELAY,
    )


async def get_chat_service(
    db: AsyncSession = Depends(get_chat_db),
    detector: CrisisDetector = Depends(get_crisis_detector),
    ai_client: AIResponseClient = Depends(get_ai_client)
) -> ChatService:
    """Dependency to get chat service"""
    return ChatService(
        sessions=SessionStore(db),
        messages=MessageStore(db),
        detector=detector,
        ai_client=ai_client,
        settings=get_chat_settings(),
    )


@router.post("/start", response_model=ChatSessionResponse, status_code=status.HTTP_201_CREATED)
async def start_session(
    session_data: Optional[ChatSessionCreate] = None,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """
    Start a new chat session

    - **title**: Optional title, defaults to "New Conversation"
    """
    title = session_data.title if session_data else None
    return await chat_service.start_session(pseudonym_id, title)


@router.get("/sessions", response_model=List[ChatSessionResponse])
async def list_sessions(
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """List the caller's sessions, most recently active first"""
    return await chat_service.list_sessions(pseudonym_id)


@router.get("/session/{session_id}", response_model=List[MessageResponse])
async def get_session_messages(
    session_id: str,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Get all messages of a session in chronological order"""
    return await chat_service.get_messages(pseudonym_id, session_id)


@router.put("/session/{session_id}", response_model=ChatSessionResponse)
async def update_session(
    session_id: str,
    session_data: ChatSessionUpdate,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Rename a session"""
    return await chat_service.rename_session(pseudonym_id, session_id, session_data.title)


@router.delete("/session/{session_id}", response_model=DeleteSessionResponse)
async def delete_session(
    session_id: str,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Delete a session and all its messages"""
    await chat_service.delete_session(pseudonym_id, session_id)
    return {"message": "Session deleted successfully"}


@router.post(
    "/session/{session_id}/message",
    response_model=SendMessageResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED
)
async def send_message(
    session_id: str,
    request: SendMessageRequest,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """
    Send a message and receive the AI response

    If the message contains crisis language the session is locked, the AI is
    not called, and `aiMessage` carries the safety message with `isLocked: true`.
    """
    result = await chat_service.send_message(pseudonym_id, session_id, request.content)
    return SendMessageResponse(
        user_message=MessageResponse.model_validate(result.user_message),
        ai_message=MessageResponse.model_validate(result.ai_message),
        is_locked=True if result.is_locked else None,
    )


@router.post("/session/{session_id}/unlock", response_model=ChatSessionResponse)
async def unlock_session(
    session_id: str,
    pseudonym_id: str = Depends(get_current_pseudonym),
    chat_service: ChatService = Depends(get_chat_service)
):
    """Unlock a crisis-locked session once the user confirms they are safe"""
    return await chat_service.unlock_session(pseudonym_id, session_id)
