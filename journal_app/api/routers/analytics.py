# journal_app/api/routers/analytics.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from journal_app import schemas
from journal_app.api.dependencies import get_analytics
from journal_app.services.analytics import AnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("", response_model=schemas.JournalAnalytics)
def read_analytics(
    start_date: Optional[date] = Query(None, description="Start date (inclusive)"),
    end_date: Optional[date] = Query(None, description="End date (inclusive)"),
    analytics: AnalyticsService = Depends(get_analytics),
):
    """
    Dashboard statistics.

    - Mood distribution by primary-mood category
    - Most frequent primary mood
    - Tag frequency, most used first
    - Average word count per day
    - Streaks (always over all entries)
    """
    return analytics.get_analytics(start_date=start_date, end_date=end_date)


@router.get("/streak", response_model=schemas.StreakInfo)
def get_streak(analytics: AnalyticsService = Depends(get_analytics)):
    return analytics.calculate_streak()
