# journal_app/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, status

from journal_app import schemas
from journal_app.api.dependencies import get_store
from journal_app.core.exceptions import NotFoundError
from journal_app.core.security import require_authorized
from journal_app.services.journal_store import JournalStore

router = APIRouter(tags=["Moods & Tags"])


# ====================================================
# MOODS
# ====================================================

@router.get("/moods", response_model=List[schemas.MoodRead])
def list_moods(store: JournalStore = Depends(get_store)):
    return store.list_moods()


@router.post(
    "/moods",
    response_model=schemas.MoodRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_authorized)],
)
def add_mood(mood_in: schemas.MoodCreate, store: JournalStore = Depends(get_store)):
    return store.add_mood(mood_in)


@router.delete(
    "/moods/{mood_id}",
    response_model=schemas.SuccessResponse,
    dependencies=[Depends(require_authorized)],
)
def delete_mood(mood_id: int, store: JournalStore = Depends(get_store)):
    """Delete a mood. Moods still attached to an entry cannot be deleted (409)."""
    if not store.delete_mood(mood_id):
        raise NotFoundError(f"Mood {mood_id} not found")
    return schemas.SuccessResponse(message=f"Mood {mood_id} deleted")


# ====================================================
# TAGS
# ====================================================

@router.get("/tags", response_model=List[schemas.TagRead])
def list_tags(store: JournalStore = Depends(get_store)):
    return store.list_tags()


@router.post(
    "/tags",
    response_model=schemas.TagRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_authorized)],
)
def add_tag(tag_in: schemas.TagCreate, store: JournalStore = Depends(get_store)):
    return store.add_tag(tag_in)


@router.delete(
    "/tags/{tag_id}",
    response_model=schemas.SuccessResponse,
    dependencies=[Depends(require_authorized)],
)
def delete_tag(tag_id: int, store: JournalStore = Depends(get_store)):
    """Delete a tag. Tags still attached to an entry cannot be deleted (409)."""
    if not store.delete_tag(tag_id):
        raise NotFoundError(f"Tag {tag_id} not found")
    return schemas.SuccessResponse(message=f"Tag {tag_id} deleted")
