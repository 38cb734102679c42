"""
User and session domain models.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class User(BaseModel):
    """Registered user (password hash never leaves the repository)."""

    id: int
    email: str
    name: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PageSession(BaseModel):
    """
    Minimized, serializable session handed to rendered pages.
    Only id, email and name are exposed.
    """

    id: str = Field(..., description="User ID (token subject)")
    email: str
    name: str

    class Config:
        frozen = True
