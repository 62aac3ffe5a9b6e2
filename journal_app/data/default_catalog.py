# journal_app/data/default_catalog.py
from typing import Any, Dict, List

from journal_app.models.mood import MoodCategory


# =====================================================================
# DEFAULT MOODS (6 positive, 4 neutral, 5 negative)
# =====================================================================

DEFAULT_MOODS: List[Dict[str, Any]] = [
    # POSITIVE
    {"name": "Happy", "category": MoodCategory.Positive, "emoji": "😊"},
    {"name": "Excited", "category": MoodCategory.Positive, "emoji": "🎉"},
    {"name": "Grateful", "category": MoodCategory.Positive, "emoji": "🙏"},
    {"name": "Peaceful", "category": MoodCategory.Positive, "emoji": "😌"},
    {"name": "Loved", "category": MoodCategory.Positive, "emoji": "❤️"},
    {"name": "Confident", "category": MoodCategory.Positive, "emoji": "💪"},

    # NEUTRAL
    {"name": "Calm", "category": MoodCategory.Neutral, "emoji": "😐"},
    {"name": "Tired", "category": MoodCategory.Neutral, "emoji": "😴"},
    {"name": "Thoughtful", "category": MoodCategory.Neutral, "emoji": "🤔"},
    {"name": "Busy", "category": MoodCategory.Neutral, "emoji": "📋"},

    # NEGATIVE
    {"name": "Sad", "category": MoodCategory.Negative, "emoji": "😢"},
    {"name": "Anxious", "category": MoodCategory.Negative, "emoji": "😰"},
    {"name": "Stressed", "category": MoodCategory.Negative, "emoji": "😫"},
    {"name": "Angry", "category": MoodCategory.Negative, "emoji": "😠"},
    {"name": "Lonely", "category": MoodCategory.Negative, "emoji": "😔"},
]


# =====================================================================
# DEFAULT TAGS
# =====================================================================

DEFAULT_TAGS: List[Dict[str, Any]] = [
    {"name": "Work", "category": "Professional", "color": "#3B82F6"},
    {"name": "Health", "category": "Wellness", "color": "#10B981"},
    {"name": "Travel", "category": "Lifestyle", "color": "#F59E0B"},
    {"name": "Fitness", "category": "Wellness", "color": "#EF4444"},
    {"name": "Family", "category": "Personal", "color": "#EC4899"},
    {"name": "Friends", "category": "Personal", "color": "#8B5CF6"},
    {"name": "Learning", "category": "Growth", "color": "#06B6D4"},
    {"name": "Finance", "category": "Professional", "color": "#84CC16"},
]

DEFAULT_USER_NAME = "Default User"
