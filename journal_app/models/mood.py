# models/mood.py

import enum
from typing import Optional
from sqlalchemy import Column, Integer, String, Boolean
from journal_app.core.config import Base


class MoodCategory(str, enum.Enum):
    Positive = "Positive"
    Neutral = "Neutral"
    Negative = "Negative"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["MoodCategory"]:
        """Return the category for a stored string, or None if unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


class Mood(Base):
    __tablename__ = "moods"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(50), nullable=False)
    category = Column(String(20), nullable=False, default=MoodCategory.Neutral.value)
    emoji = Column(String(10), nullable=True)
    is_predefined = Column(Boolean, nullable=False, default=False)

    @property
    def category_enum(self) -> Optional[MoodCategory]:
        return MoodCategory.parse(self.category)
