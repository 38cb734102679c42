"""
Middleware package for FastAPI application.
"""

from .auth import AuthMiddleware
from .request_logging import RequestLoggingMiddleware

__all__ = ["AuthMiddleware", "RequestLoggingMiddleware"]
