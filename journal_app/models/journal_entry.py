# models/journal_entry.py

from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Text, Date, DateTime, ForeignKey, UniqueConstraint
)
from journal_app.core.config import Base


class JournalEntry(Base):
    __tablename__ = "journal_entries"
    __table_args__ = (
        # One entry per user per calendar day
        UniqueConstraint("user_id", "entry_date", name="uq_journal_entries_user_day"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, index=True)

    title = Column(String(200), nullable=False, default="")
    content = Column(Text, nullable=False, default="")  # rich text (HTML) from the editor
    word_count = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return f"<JournalEntry id={self.id} date={self.entry_date}>"
