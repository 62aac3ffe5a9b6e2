# journal_app/schemas/__init__.py

from .mood import MoodCreate, MoodRead
from .tag import TagCreate, TagRead
from .user import UserRead, UserUpdate
from .journal_entry import (
    JournalEntryBase,
    JournalEntryCreate,
    JournalEntryUpdate,
    JournalEntryRead,
    JournalEntryDetail,
    EntryMoodsUpdate,
    EntryTagsUpdate,
)
from .analytics import StreakInfo, JournalAnalytics
from .auth import UnlockRequest, TokenResponse, AuthStatus, SuccessResponse


__all__ = [
    # Catalog
    "MoodCreate", "MoodRead", "TagCreate", "TagRead",

    # Users
    "UserRead", "UserUpdate",

    # Entries
    "JournalEntryBase", "JournalEntryCreate", "JournalEntryUpdate",
    "JournalEntryRead", "JournalEntryDetail", "EntryMoodsUpdate", "EntryTagsUpdate",

    # Analytics
    "StreakInfo", "JournalAnalytics",

    # Auth
    "UnlockRequest", "TokenResponse", "AuthStatus", "SuccessResponse",
]
