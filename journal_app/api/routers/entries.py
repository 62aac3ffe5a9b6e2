# journal_app/api/routers/entries.py
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from journal_app import models, schemas
from journal_app.api.dependencies import get_store
from journal_app.core.exceptions import NotFoundError
from journal_app.core.security import require_authorized
from journal_app.services.journal_store import JournalStore

router = APIRouter(prefix="/entries", tags=["Journal Entries"])


def _detail(store: JournalStore, entry: models.JournalEntry) -> schemas.JournalEntryDetail:
    primary = store.get_primary_mood(entry.id)
    return schemas.JournalEntryDetail(
        **schemas.JournalEntryRead.model_validate(entry).model_dump(),
        primary_mood=schemas.MoodRead.model_validate(primary) if primary else None,
        secondary_moods=[
            schemas.MoodRead.model_validate(m) for m in store.get_secondary_moods(entry.id)
        ],
        tags=[schemas.TagRead.model_validate(t) for t in store.get_tags_for_entry(entry.id)],
    )


def _get_or_404(store: JournalStore, entry_id: int) -> models.JournalEntry:
    entry = store.get_entry_by_id(entry_id)
    if entry is None:
        raise NotFoundError(f"Entry {entry_id} not found")
    return entry


# ====================================================
# LIST / SEARCH
# ====================================================

@router.get("", response_model=List[schemas.JournalEntryRead])
def list_entries(
    search: Optional[str] = Query(None, description="Case-insensitive text in title or content"),
    store: JournalStore = Depends(get_store),
):
    """All entries, most recent first. A blank search returns everything."""
    if search is not None:
        return store.search_entries(search)
    return store.list_all_entries()


@router.get("/filter", response_model=List[schemas.JournalEntryRead])
def filter_entries(
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    mood_ids: Optional[List[int]] = Query(None, description="Entries with any of these moods"),
    tag_ids: Optional[List[int]] = Query(None, description="Entries with any of these tags"),
    store: JournalStore = Depends(get_store),
):
    return store.filter_entries(
        start_date=start_date, end_date=end_date, mood_ids=mood_ids, tag_ids=tag_ids
    )


@router.get("/range", response_model=List[schemas.JournalEntryRead])
def list_entries_in_range(
    start_date: date = Query(..., description="Start date (inclusive)"),
    end_date: date = Query(..., description="End date (inclusive)"),
    store: JournalStore = Depends(get_store),
):
    return store.list_entries_in_range(start_date, end_date)


@router.get("/by-date/{entry_date}", response_model=schemas.JournalEntryDetail)
def get_entry_by_date(entry_date: date, store: JournalStore = Depends(get_store)):
    entry = store.get_entry_by_date(None, entry_date)
    if entry is None:
        raise NotFoundError(f"No entry found for date {entry_date}")
    return _detail(store, entry)


@router.get("/{entry_id}", response_model=schemas.JournalEntryDetail)
def get_entry(entry_id: int, store: JournalStore = Depends(get_store)):
    return _detail(store, _get_or_404(store, entry_id))


# ====================================================
# CREATE / UPDATE / DELETE
# ====================================================

@router.post(
    "",
    response_model=schemas.JournalEntryDetail,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_authorized)],
)
def create_entry(
    entry_in: schemas.JournalEntryCreate, store: JournalStore = Depends(get_store)
):
    """Write the entry for a day. A second entry for the same day is rejected (409)."""
    entry_id = store.create_entry(entry_in)
    return _detail(store, _get_or_404(store, entry_id))


@router.put(
    "/{entry_id}",
    response_model=schemas.JournalEntryDetail,
    dependencies=[Depends(require_authorized)],
)
def update_entry(
    entry_id: int,
    entry_in: schemas.JournalEntryUpdate,
    store: JournalStore = Depends(get_store),
):
    """Replace the entry's date, title, content and word count."""
    entry = store.update_entry(entry_id, entry_in)
    if entry is None:
        raise NotFoundError(f"Entry {entry_id} not found")
    return _detail(store, entry)


@router.delete(
    "/{entry_id}",
    response_model=schemas.SuccessResponse,
    dependencies=[Depends(require_authorized)],
)
def delete_entry(entry_id: int, store: JournalStore = Depends(get_store)):
    if not store.delete_entry(entry_id):
        raise NotFoundError(f"Entry {entry_id} not found")
    return schemas.SuccessResponse(message=f"Entry {entry_id} deleted")


# ====================================================
# MOODS & TAGS ON AN ENTRY
# ====================================================

@router.get("/{entry_id}/moods", response_model=List[schemas.MoodRead])
def get_entry_moods(entry_id: int, store: JournalStore = Depends(get_store)):
    _get_or_404(store, entry_id)
    return store.get_moods_for_entry(entry_id)


@router.put(
    "/{entry_id}/moods",
    response_model=schemas.JournalEntryDetail,
    dependencies=[Depends(require_authorized)],
)
def set_entry_moods(
    entry_id: int,
    moods_in: schemas.EntryMoodsUpdate,
    store: JournalStore = Depends(get_store),
):
    """Replace the entry's moods. Secondary moods past the second are ignored."""
    store.set_entry_moods(entry_id, moods_in.primary_mood_id, moods_in.secondary_mood_ids)
    return _detail(store, _get_or_404(store, entry_id))


@router.get("/{entry_id}/tags", response_model=List[schemas.TagRead])
def get_entry_tags(entry_id: int, store: JournalStore = Depends(get_store)):
    _get_or_404(store, entry_id)
    return store.get_tags_for_entry(entry_id)


@router.put(
    "/{entry_id}/tags",
    response_model=schemas.JournalEntryDetail,
    dependencies=[Depends(require_authorized)],
)
def set_entry_tags(
    entry_id: int,
    tags_in: schemas.EntryTagsUpdate,
    store: JournalStore = Depends(get_store),
):
    store.set_entry_tags(entry_id, tags_in.tag_ids)
    return _detail(store, _get_or_404(store, entry_id))
