"""
Infrastructure package - external dependencies and integrations.

Modules:
- database.py - SQLAlchemy engine, sessions and declarative base
"""

from infrastructure.database import Base, SessionLocal, engine, get_db, init_db

__all__ = [
    'Base',
    'SessionLocal',
    'engine',
    'get_db',
    'init_db',
]
