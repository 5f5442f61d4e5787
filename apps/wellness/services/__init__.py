from .journal_service import JournalService
from .mood_service import MoodService

__all__ = ["JournalService", "MoodService"]
