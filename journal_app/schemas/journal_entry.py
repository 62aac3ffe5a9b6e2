# schemas/journal_entry.py
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from journal_app.schemas.mood import MoodRead
from journal_app.schemas.tag import TagRead


# =====================================================================
# BASE
# =====================================================================

class JournalEntryBase(BaseModel):
    entry_date: date = Field(..., description="Calendar day of the entry; times are dropped")
    title: str = Field(default="", max_length=200)
    content: str = Field(default="", description="Rich text (HTML) from the editor")
    word_count: Optional[int] = Field(
        default=None, ge=0, description="Counted from content when omitted"
    )

    @field_validator("entry_date", mode="before")
    @classmethod
    def truncate_to_day(cls, v):
        if isinstance(v, str) and len(v) > 10:
            try:
                v = datetime.fromisoformat(v.replace("Z", "+00:00"))
            except ValueError:
                return v
        if isinstance(v, datetime):
            return v.date()
        return v


# =====================================================================
# CREATE / UPDATE
# =====================================================================

class JournalEntryCreate(JournalEntryBase):
    user_id: Optional[int] = Field(default=None, ge=1, description="Defaults to the journal owner")


class JournalEntryUpdate(JournalEntryBase):
    """Full replacement of an entry's editable fields (no partial patch)."""
    pass


class EntryMoodsUpdate(BaseModel):
    primary_mood_id: int = Field(..., ge=1)
    secondary_mood_ids: List[int] = Field(
        default_factory=list, description="Only the first two are kept"
    )


class EntryTagsUpdate(BaseModel):
    tag_ids: List[int] = Field(default_factory=list)


# =====================================================================
# READ
# =====================================================================

class JournalEntryRead(BaseModel):
    id: int
    user_id: int
    entry_date: date
    title: str
    content: str
    word_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class JournalEntryDetail(JournalEntryRead):
    primary_mood: Optional[MoodRead] = None
    secondary_moods: List[MoodRead] = []
    tags: List[TagRead] = []
