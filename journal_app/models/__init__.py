# journal_app/models/__init__.py

from journal_app.core.config import Base

# Import all models here so create_all sees every table
from .user import User
from .journal_entry import JournalEntry
from .mood import Mood, MoodCategory
from .tag import Tag
from .journal_entry_mood import JournalEntryMood, MoodRole
from .journal_entry_tag import JournalEntryTag

__all__ = [
    "Base",
    "User",
    "JournalEntry",
    "Mood",
    "MoodCategory",
    "Tag",
    "JournalEntryMood",
    "MoodRole",
    "JournalEntryTag",
]
