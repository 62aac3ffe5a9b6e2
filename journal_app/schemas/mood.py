# schemas/mood.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from journal_app.models.mood import MoodCategory


class MoodCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    category: MoodCategory = MoodCategory.Neutral
    emoji: Optional[str] = Field(default=None, max_length=10)


class MoodRead(BaseModel):
    id: int
    name: str
    category: str  # stored string; may be outside MoodCategory for legacy rows
    emoji: Optional[str] = None
    is_predefined: bool

    model_config = ConfigDict(from_attributes=True)
