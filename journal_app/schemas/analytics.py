# schemas/analytics.py
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from journal_app.models.mood import MoodCategory


class StreakInfo(BaseModel):
    current_streak: int = 0
    longest_streak: int = 0
    total_entries: int = 0
    missed_days: List[date] = Field(default_factory=list)


class JournalAnalytics(BaseModel):
    mood_distribution: Dict[MoodCategory, int] = Field(
        default_factory=lambda: {category: 0 for category in MoodCategory}
    )
    most_frequent_mood: Optional[str] = None
    tag_frequency: Dict[str, int] = Field(default_factory=dict)
    word_count_trends: Dict[date, float] = Field(default_factory=dict)
    streak_info: StreakInfo = Field(default_factory=StreakInfo)
