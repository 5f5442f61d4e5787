from apps.wellness.routes.journal import router as journal_router
from apps.wellness.routes.mood import router as mood_router

__all__ = ["journal_router", "mood_router"]
