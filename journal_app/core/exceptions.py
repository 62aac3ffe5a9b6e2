import logging
from datetime import date
from typing import Optional

from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)


# ---------------------------
# Store / business errors
# ---------------------------

class BusinessError(Exception):
    """Base class for all journal errors."""
    pass


class NotFoundError(BusinessError):
    """Raised when a requested entry, mood or tag does not exist."""
    pass


class ConflictError(BusinessError):
    """Raised when a write would break a uniqueness or reference rule."""

    def __init__(self, message: str, entry_date: Optional[date] = None):
        super().__init__(message)
        self.entry_date = entry_date


class ValidationError(BusinessError):
    """Raised for structurally invalid input (e.g. a negative id)."""
    pass


class StoreUnavailableError(BusinessError):
    """Raised when the journal database cannot be opened, read or written."""
    pass


class UnauthorizedError(BusinessError):
    """Raised when the journal is locked and the caller has no valid token."""
    pass


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        content = {"detail": str(exc)}
        if exc.entry_date is not None:
            content["date"] = exc.entry_date.isoformat()
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=content,
        )

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"detail": str(exc)},
            headers={"WWW-Authenticate": "Bearer"},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(request: Request, exc: StoreUnavailableError):
        logger.error(f"Store unavailable: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Journal storage is unavailable"},
        )
