# models/journal_entry_mood.py

import enum
from sqlalchemy import Column, Integer, String, ForeignKey
from journal_app.core.config import Base


class MoodRole(str, enum.Enum):
    Primary = "Primary"
    Secondary = "Secondary"


class JournalEntryMood(Base):
    __tablename__ = "journal_entry_moods"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    # Not cascaded by the database; the journal store removes these rows itself
    entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False, index=True)
    mood_id = Column(Integer, ForeignKey("moods.id"), nullable=False, index=True)
    mood_type = Column(String(20), nullable=False)  # Primary | Secondary
