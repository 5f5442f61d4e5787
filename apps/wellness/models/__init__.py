# Import all models so SQLAlchemy can discover them
from .journal_entry import JournalEntry, JournalMood
from .mood_log import MoodLog, Emotion

__all__ = ["JournalEntry", "JournalMood", "MoodLog", "Emotion"]
