from datetime import date

import pytest
from fastapi.testclient import TestClient

from journal_app.api.dependencies import get_analytics, get_exporter, get_store
from journal_app.core.database import Database
from journal_app.schemas import JournalEntryCreate
from journal_app.services.analytics import AnalyticsService
from journal_app.services.export import ExportService
from journal_app.services.journal_store import JournalStore


@pytest.fixture()
def database(tmp_path):
    db = Database(f"sqlite:///{tmp_path / 'journal.db'}")
    yield db
    db.close()


@pytest.fixture()
def store(database):
    return JournalStore(database)


@pytest.fixture()
def analytics(store):
    return AnalyticsService(store)


@pytest.fixture()
def exporter(store):
    return ExportService(store)


@pytest.fixture()
def moods(store):
    """Seeded moods by name."""
    return {mood.name: mood for mood in store.list_moods()}


@pytest.fixture()
def tags(store):
    """Seeded tags by name."""
    return {tag.name: tag for tag in store.list_tags()}


@pytest.fixture()
def make_entry(store):
    def _make(day: date, title: str = "", content: str = "", word_count: int = 0) -> int:
        return store.create_entry(
            JournalEntryCreate(
                entry_date=day, title=title, content=content, word_count=word_count
            )
        )

    return _make


@pytest.fixture()
def client(store, analytics, exporter):
    from main import app

    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_analytics] = lambda: analytics
    app.dependency_overrides[get_exporter] = lambda: exporter
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
