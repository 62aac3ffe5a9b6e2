# models/tag.py

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from journal_app.core.config import Base


class Tag(Base):
    __tablename__ = "tags"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    category = Column(String(50), nullable=True)  # grouping label, e.g. "Wellness"
    color = Column(String(10), nullable=True)  # hex, e.g. "#10B981"
    is_predefined = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, nullable=False, default=datetime.now)
