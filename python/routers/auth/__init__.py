"""
Auth Router Package
Handles registration, login/logout and session lookup
"""

from fastapi import APIRouter
from .session import router as session_router

router = APIRouter(prefix="/auth", tags=["auth"])
router.include_router(session_router)
