"""
Exercise and Method domain models.
Both are catalogue records shown on the list pages.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field


class Exercise(BaseModel):
    """Exercise catalogue entry."""

    id: int = Field(..., description="Unique exercise ID")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="Free-text description")

    muscle_group: Optional[str] = Field(None, description="Primary muscle group")
    equipment: Optional[str] = Field(None, description="Required equipment")
    video_url: Optional[str] = Field(None, description="Demonstration video")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def has_video(self) -> bool:
        return bool(self.video_url)

    class Config:
        from_attributes = True


class Method(BaseModel):
    """Training method (drop set, pyramid, rest-pause...)."""

    id: int = Field(..., description="Unique method ID")
    name: str = Field(..., description="Display name")
    description: str = Field("", description="How the method is performed")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    class Config:
        from_attributes = True
