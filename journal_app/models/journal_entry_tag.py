# models/journal_entry_tag.py

from sqlalchemy import Column, Integer, ForeignKey
from journal_app.core.config import Base


class JournalEntryTag(Base):
    __tablename__ = "journal_entry_tags"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False, index=True)
    tag_id = Column(Integer, ForeignKey("tags.id"), nullable=False, index=True)
