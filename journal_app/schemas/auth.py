# schemas/auth.py
from pydantic import BaseModel, Field


class UnlockRequest(BaseModel):
    pin: str = Field(..., min_length=4, max_length=128)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthStatus(BaseModel):
    locked: bool
    authorized: bool


class SuccessResponse(BaseModel):
    success: bool = True
    message: str
