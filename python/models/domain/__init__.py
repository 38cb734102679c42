"""
Domain models - core business entities.
"""

from models.domain.exercise import Exercise, Method
from models.domain.training_sheet import (
    TrainingSheet,
    TrainingSheetSummary,
    TrainingDay,
    SheetEntry,
)
from models.domain.schedule import TrainingSchedule, ScheduleDay
from models.domain.user import User, PageSession

__all__ = [
    'Exercise',
    'Method',
    'TrainingSheet',
    'TrainingSheetSummary',
    'TrainingDay',
    'SheetEntry',
    'TrainingSchedule',
    'ScheduleDay',
    'User',
    'PageSession',
]
