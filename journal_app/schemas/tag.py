# schemas/tag.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    category: Optional[str] = Field(default=None, max_length=50)
    color: Optional[str] = Field(default=None, max_length=10, pattern=r"^#[0-9A-Fa-f]{3,8}$")


class TagRead(BaseModel):
    id: int
    name: str
    category: Optional[str] = None
    color: Optional[str] = None
    is_predefined: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
