# services/analytics.py
import logging
from collections import Counter, defaultdict
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional, Sequence

from journal_app import models
from journal_app.models.mood import MoodCategory
from journal_app.schemas.analytics import JournalAnalytics, StreakInfo
from journal_app.services.journal_store import JournalStore, journal_store

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


# =====================================================================
# STREAK ARITHMETIC
# =====================================================================

def current_streak(entry_days: Iterable[date], today: date) -> int:
    """Consecutive days with an entry, ending today or yesterday."""
    days = set(entry_days)
    yesterday = today - ONE_DAY

    if today not in days and yesterday not in days:
        return 0

    check_date = today if today in days else yesterday
    streak = 0
    while check_date in days:
        streak += 1
        check_date -= ONE_DAY
    return streak


def longest_streak(entry_days: Iterable[date]) -> int:
    """Longest run of consecutive calendar days."""
    days = sorted(set(entry_days), reverse=True)
    if not days:
        return 0

    best = run = 1
    for newer, older in zip(days, days[1:]):
        if (newer - older).days == 1:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def missed_days(entry_days: Iterable[date], today: date) -> List[date]:
    """Days from the first entry through today that have no entry."""
    days = set(entry_days)
    if not days:
        return []

    missed = []
    day = min(days)
    while day <= today:
        if day not in days:
            missed.append(day)
        day += ONE_DAY
    return missed


# =====================================================================
# SERVICE
# =====================================================================

class AnalyticsService:
    """
    Read-only statistics over the journal store.

    Holds no state between calls. Store failures propagate unchanged.
    """

    def __init__(self, store: JournalStore):
        self.store = store

    def get_analytics(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        today: Optional[date] = None,
    ) -> JournalAnalytics:
        """All dashboard statistics. Range bounds are optional and inclusive."""
        try:
            entries = self._entries(start_date, end_date)
            return JournalAnalytics(
                mood_distribution=self.mood_distribution(entries),
                most_frequent_mood=self.most_frequent_mood(entries),
                tag_frequency=self.tag_frequency(entries),
                word_count_trends=self.word_count_trend(entries),
                streak_info=self.calculate_streak(today=today),
            )
        except Exception:
            logger.exception("Could not calculate analytics")
            raise

    # ====================================================
    # MOODS
    # ====================================================

    def mood_distribution(
        self, entries: Sequence[models.JournalEntry]
    ) -> Dict[MoodCategory, int]:
        """Entries per primary-mood category. Every category is present."""
        distribution = {category: 0 for category in MoodCategory}

        for entry in entries:
            mood = self.store.get_primary_mood(entry.id)
            if mood is None:
                continue
            category = mood.category_enum
            if category is not None:
                distribution[category] += 1

        return distribution

    def most_frequent_mood(self, entries: Sequence[models.JournalEntry]) -> Optional[str]:
        """
        Name of the most common primary mood, or None.

        Ties go to the mood seen first while walking `entries` in order.
        """
        counts: Counter = Counter()
        for entry in entries:
            mood = self.store.get_primary_mood(entry.id)
            if mood is not None:
                counts[mood.name] += 1

        if not counts:
            return None
        # Counter preserves insertion order and most_common() sorts stably
        return counts.most_common(1)[0][0]

    # ====================================================
    # TAGS & WORDS
    # ====================================================

    def tag_frequency(self, entries: Sequence[models.JournalEntry]) -> Dict[str, int]:
        counts: Counter = Counter()
        for entry in entries:
            for tag in self.store.get_tags_for_entry(entry.id):
                counts[tag.name] += 1
        return dict(counts.most_common())

    def word_count_trend(self, entries: Sequence[models.JournalEntry]) -> Dict[date, float]:
        """Average word count per calendar day, oldest day first."""
        by_day: Dict[date, List[int]] = defaultdict(list)
        for entry in entries:
            by_day[entry.entry_date].append(entry.word_count or 0)

        return {
            day: sum(counts) / len(counts)
            for day, counts in sorted(by_day.items())
        }

    # ====================================================
    # STREAKS
    # ====================================================

    def calculate_streak(self, today: Optional[date] = None) -> StreakInfo:
        """Streak statistics over every entry, ignoring any date range."""
        today = today or date.today()
        try:
            entry_days = self.store.get_entry_days()
            if not entry_days:
                return StreakInfo()

            return StreakInfo(
                current_streak=current_streak(entry_days, today),
                longest_streak=longest_streak(entry_days),
                total_entries=self.store.count_entries(),
                missed_days=missed_days(entry_days, today),
            )
        except Exception:
            logger.exception("Could not calculate streak")
            raise

    # ====================================================
    # HELPERS
    # ====================================================

    def _entries(
        self, start_date: Optional[date], end_date: Optional[date]
    ) -> List[models.JournalEntry]:
        if start_date is None and end_date is None:
            return self.store.list_all_entries()
        return self.store.list_entries_in_range(
            start_date or date.min, end_date or date.max
        )


analytics_service = AnalyticsService(journal_store)
