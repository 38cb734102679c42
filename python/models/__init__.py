"""
Models package - data structures for the application.

Subpackages:
- domain/ - Domain models (core business entities)
- requests/ - Request DTOs (API input)

tables.py - SQLAlchemy table models (persistence only)
"""

# Re-export commonly used models
from models.domain.exercise import Exercise, Method
from models.domain.training_sheet import TrainingSheet, TrainingSheetSummary
from models.domain.schedule import TrainingSchedule
from models.domain.user import User, PageSession

__all__ = [
    # Catalogue
    'Exercise',
    'Method',
    # Planning
    'TrainingSheet',
    'TrainingSheetSummary',
    'TrainingSchedule',
    # Users
    'User',
    'PageSession',
]
