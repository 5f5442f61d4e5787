# api/v1/router.py
from fastapi import APIRouter
from api.v1.chat import router as chat_router
from api.v1.wellness import journal_router, mood_router

router = APIRouter()

# Mount domain routers
router.include_router(chat_router, prefix="/chat", tags=["Chat"])
router.include_router(journal_router, prefix="/journal", tags=["Journal"])
router.include_router(mood_router, prefix="/mood", tags=["Mood"])
