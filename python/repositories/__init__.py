"""
Repositories package - data access layer.

Repositories handle all database operations.
No business logic - only queries and data transformation.

Usage:
    from repositories import ExercisesRepository

    repo = ExercisesRepository(db)
    exercises = repo.list_by_name(search="squat")
"""

from repositories.base import BaseRepository
from repositories.catalogue_repo import ExercisesRepository, MethodsRepository
from repositories.planning_repo import TrainingSheetsRepository, SchedulesRepository
from repositories.users_repo import UsersRepository

__all__ = [
    'BaseRepository',
    'ExercisesRepository',
    'MethodsRepository',
    'TrainingSheetsRepository',
    'SchedulesRepository',
    'UsersRepository',
]
