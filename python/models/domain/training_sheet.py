"""
Training sheet domain models.
A sheet is split into days; each day lists exercises performed with a method.
"""

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from models.domain.exercise import Exercise, Method


class TrainingSheetSummary(BaseModel):
    """Lightweight sheet reference used when picking a sheet for a schedule."""

    id: int
    name: str
    public_name: Optional[str] = None

    class Config:
        from_attributes = True
        frozen = True


class SheetEntry(BaseModel):
    """Exercise configuration within a training day."""

    id: int
    exercise_id: int
    method_id: Optional[int] = None
    order: int = Field(0, ge=0, description="Position within the day")
    series: Optional[int] = Field(None, ge=1)
    repetitions: Optional[str] = Field(None, description="e.g. '10', '8-12', 'failure'")
    rest_seconds: Optional[int] = Field(None, ge=0)

    exercise: Optional[Exercise] = None
    method: Optional[Method] = None

    class Config:
        from_attributes = True


class TrainingDay(BaseModel):
    """One day (A, B, C...) of a training sheet."""

    id: int
    day_number: int = Field(..., ge=1)
    name: Optional[str] = None
    entries: List[SheetEntry] = Field(default_factory=list)

    class Config:
        from_attributes = True


class TrainingSheet(BaseModel):
    """Full training sheet with nested days and entries."""

    id: int = Field(..., description="Unique sheet ID")
    name: str = Field(..., description="Internal name")
    public_name: Optional[str] = Field(None, description="Name shown to the athlete")
    description: str = Field("", description="Notes")
    days: List[TrainingDay] = Field(default_factory=list)

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @property
    def display_name(self) -> str:
        """Public name when set, otherwise the internal name."""
        return self.public_name or self.name

    @property
    def exercises_count(self) -> int:
        return sum(len(day.entries) for day in self.days)

    class Config:
        from_attributes = True
