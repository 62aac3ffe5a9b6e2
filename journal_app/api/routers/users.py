# journal_app/api/routers/users.py
from fastapi import APIRouter, Depends

from journal_app import schemas
from journal_app.api.dependencies import get_store
from journal_app.core.security import require_authorized
from journal_app.services.journal_store import JournalStore

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("/me", response_model=schemas.UserRead)
def get_me(store: JournalStore = Depends(get_store)):
    return store.ensure_default_user()


@router.put(
    "/me",
    response_model=schemas.UserRead,
    dependencies=[Depends(require_authorized)],
)
def update_me(user_in: schemas.UserUpdate, store: JournalStore = Depends(get_store)):
    """Update display name, email or theme. Omitted fields are left as they are."""
    return store.update_user(user_in)
