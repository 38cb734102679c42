"""
Dependency injection for API and page endpoints.
Each request gets its own SQLAlchemy session; repositories wrap it.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from infrastructure.database import get_db
from repositories import (
    ExercisesRepository,
    MethodsRepository,
    TrainingSheetsRepository,
    SchedulesRepository,
    UsersRepository,
)


def get_exercises_repo(db: Session = Depends(get_db)) -> ExercisesRepository:
    return ExercisesRepository(db)


def get_methods_repo(db: Session = Depends(get_db)) -> MethodsRepository:
    return MethodsRepository(db)


def get_sheets_repo(db: Session = Depends(get_db)) -> TrainingSheetsRepository:
    return TrainingSheetsRepository(db)


def get_schedules_repo(db: Session = Depends(get_db)) -> SchedulesRepository:
    return SchedulesRepository(db)


def get_users_repo(db: Session = Depends(get_db)) -> UsersRepository:
    return UsersRepository(db)
