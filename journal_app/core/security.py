# journal_app/core/security.py
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from passlib.context import CryptContext

from journal_app.core.config import settings
from journal_app.core.exceptions import UnauthorizedError


# =====================================================================
# PIN HASHING
# =====================================================================

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

security = HTTPBearer(auto_error=False)


def hash_pin(pin: str) -> str:
    """Hash a PIN for the APP_PIN_HASH setting."""
    return pwd_context.hash(pin)


def verify_pin(pin: str, hashed_pin: str) -> bool:
    return pwd_context.verify(pin, hashed_pin)


def is_locked() -> bool:
    """The journal is locked only when a PIN hash is configured."""
    return bool(settings.APP_PIN_HASH)


# =====================================================================
# TOKENS
# =====================================================================

def create_access_token(subject: str = "owner") -> str:
    """
    Create JWT access token.

    Args:
        subject: Value stored in the "sub" claim

    Returns:
        Encoded JWT access token
    """
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {"sub": subject, "exp": expire, "type": "access"}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_access_token(token: str) -> str:
    """
    Verify JWT token and return its subject.

    Raises:
        UnauthorizedError: If token is invalid, expired or of the wrong type
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise UnauthorizedError("Could not validate credentials")

    subject = payload.get("sub")
    if subject is None or payload.get("type") != "access":
        raise UnauthorizedError("Could not validate credentials")
    return subject


def unlock(pin: str) -> str:
    """Check the PIN and issue a session token."""
    if is_locked() and not verify_pin(pin, settings.APP_PIN_HASH):
        raise UnauthorizedError("Incorrect PIN")
    return create_access_token()


# =====================================================================
# GATE
# =====================================================================

class AuthGate:
    """Answers one question for the routers: may this caller change the journal?"""

    def __init__(self, token: Optional[str]):
        self.token = token

    def is_authorized(self) -> bool:
        if not is_locked():
            return True
        if not self.token:
            return False
        try:
            verify_access_token(self.token)
        except UnauthorizedError:
            return False
        return True


def get_auth_gate(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthGate:
    return AuthGate(credentials.credentials if credentials else None)


def require_authorized(gate: AuthGate = Depends(get_auth_gate)) -> AuthGate:
    """Dependency for every mutating route."""
    if not gate.is_authorized():
        raise UnauthorizedError("Journal is locked")
    return gate
