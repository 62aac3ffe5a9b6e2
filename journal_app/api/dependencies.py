# journal_app/api/dependencies.py
from journal_app.services.analytics import AnalyticsService, analytics_service
from journal_app.services.export import ExportService, export_service
from journal_app.services.journal_store import JournalStore, journal_store


def get_store() -> JournalStore:
    return journal_store


def get_analytics() -> AnalyticsService:
    return analytics_service


def get_exporter() -> ExportService:
    return export_service
