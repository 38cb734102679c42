"""
Weekly training schedule domain models.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field


class ScheduleDay(BaseModel):
    """A week day (1-7) with an optional training sheet assigned."""

    day: int = Field(..., ge=1, le=7, description="Day of the week, 1-7")
    training_sheet_id: Optional[int] = Field(None, description="Assigned sheet, None for rest")
    custom_name: Optional[str] = Field(None, description="Local display name")

    @property
    def is_rest_day(self) -> bool:
        return self.training_sheet_id is None

    class Config:
        from_attributes = True


class TrainingSchedule(BaseModel):
    """Weekly plan."""

    id: int = Field(..., description="Unique schedule ID")
    name: str = Field(..., description="Schedule name")
    description: str = Field("", description="Notes")
    week_days: List[ScheduleDay] = Field(default_factory=list)

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def training_days_count(self) -> int:
        return sum(1 for day in self.week_days if not day.is_rest_day)

    def day(self, number: int) -> Optional[ScheduleDay]:
        """Get a week day by number, None when not planned."""
        for week_day in self.week_days:
            if week_day.day == number:
                return week_day
        return None

    class Config:
        from_attributes = True
