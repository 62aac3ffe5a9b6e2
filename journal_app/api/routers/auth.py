# journal_app/api/routers/auth.py
from fastapi import APIRouter, Depends

from journal_app import schemas
from journal_app.core import security
from journal_app.core.security import AuthGate, get_auth_gate

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/unlock", response_model=schemas.TokenResponse)
def unlock(request: schemas.UnlockRequest):
    """
    Exchange the journal PIN for a bearer token.

    When no PIN is configured any PIN is accepted.
    """
    return schemas.TokenResponse(access_token=security.unlock(request.pin))


@router.get("/status", response_model=schemas.AuthStatus)
def auth_status(gate: AuthGate = Depends(get_auth_gate)):
    return schemas.AuthStatus(locked=security.is_locked(), authorized=gate.is_authorized())
