from fastapi import APIRouter
from apps.chat.routes import chat

router = APIRouter()

# Include chat routes
router.include_router(chat.router, prefix="")
