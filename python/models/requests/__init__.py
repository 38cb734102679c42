"""
Request DTOs - API input models.
Used for validating incoming API requests.
"""

from models.requests.catalogue import (
    ExerciseCreate,
    ExerciseUpdate,
    MethodCreate,
    MethodUpdate,
)
from models.requests.planning import (
    SheetEntryInput,
    TrainingDayInput,
    TrainingSheetCreate,
    ScheduleDayInput,
    TrainingScheduleCreate,
)
from models.requests.auth import LoginRequest, RegisterRequest

__all__ = [
    # Catalogue
    'ExerciseCreate',
    'ExerciseUpdate',
    'MethodCreate',
    'MethodUpdate',
    # Planning
    'SheetEntryInput',
    'TrainingDayInput',
    'TrainingSheetCreate',
    'ScheduleDayInput',
    'TrainingScheduleCreate',
    # Auth
    'LoginRequest',
    'RegisterRequest',
]
