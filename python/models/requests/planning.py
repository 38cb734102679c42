"""
Training sheet and schedule request models.
"""

from typing import Optional, List
from pydantic import BaseModel, Field, field_validator


class SheetEntryInput(BaseModel):
    exercise_id: int
    method_id: Optional[int] = None
    order: Optional[int] = Field(None, ge=0, description="Defaults to list position")
    series: Optional[int] = Field(None, ge=1)
    repetitions: Optional[str] = Field(None, max_length=50)
    rest_seconds: Optional[int] = Field(None, ge=0)


class TrainingDayInput(BaseModel):
    day_number: int = Field(..., ge=1)
    name: Optional[str] = Field(None, max_length=255)
    entries: List[SheetEntryInput] = Field(default_factory=list)


class TrainingSheetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    public_name: Optional[str] = Field(None, max_length=255)
    description: str = ""
    days: List[TrainingDayInput] = Field(default_factory=list)

    @field_validator("days")
    @classmethod
    def unique_day_numbers(cls, days: List[TrainingDayInput]) -> List[TrainingDayInput]:
        numbers = [day.day_number for day in days]
        if len(numbers) != len(set(numbers)):
            raise ValueError("day_number must be unique within a sheet")
        return days


class ScheduleDayInput(BaseModel):
    day: int = Field(..., ge=1, le=7)
    training_sheet_id: Optional[int] = None
    custom_name: Optional[str] = Field(None, max_length=255)


class TrainingScheduleCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    week_days: List[ScheduleDayInput] = Field(default_factory=list, max_length=7)

    @field_validator("week_days")
    @classmethod
    def unique_week_days(cls, week_days: List[ScheduleDayInput]) -> List[ScheduleDayInput]:
        days = [week_day.day for week_day in week_days]
        if len(days) != len(set(days)):
            raise ValueError("each week day can appear only once")
        return week_days
