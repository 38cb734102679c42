"""
Authentication Middleware for FastAPI
Requires a valid session for every /api/* route.

Public:
- OPTIONS (CORS preflight)
- /api/health, docs
- /api/auth/* (login, register, logout, session)
- Non-/api/ paths (pages gate themselves via require_page_session)
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from core.exceptions import AuthenticationError
from core.logging import get_logger
from core.responses import ApiResponse
from services.auth import decode_session_token, extract_token

logger = get_logger(__name__)


class AuthMiddleware(BaseHTTPMiddleware):
    """
    Middleware that enforces authentication for API routes.
    The decoded session is stored on request.state.session.
    """

    PUBLIC_PATHS = {
        "/api/health",
        "/api/docs",
        "/api/redoc",
        "/api/openapi.json",
    }

    PUBLIC_PREFIXES = (
        "/api/auth/",
    )

    def _is_public(self, path: str) -> bool:
        if path in self.PUBLIC_PATHS:
            return True
        return any(path.startswith(prefix) for prefix in self.PUBLIC_PREFIXES)

    async def dispatch(self, request: Request, call_next):
        path = request.url.path.rstrip("/") or "/"
        method = request.method

        # 1. OPTIONS: always allow (CORS preflight)
        if method == "OPTIONS":
            return await call_next(request)

        # 2. Non-API paths and public API paths
        if not path.startswith("/api") or self._is_public(path):
            return await call_next(request)

        # 3. Everything else needs a session
        token = extract_token(request)
        if token is None:
            logger.warning(f"Auth middleware: No session for {method} {path}")
            return self._unauthorized("Authentication required")

        try:
            session = decode_session_token(token)
        except AuthenticationError as e:
            logger.warning(f"Auth middleware: Token verification failed: {e.message}")
            return self._unauthorized(e.message)

        request.state.session = session
        logger.debug(f"Auth middleware: user {session.id} authorized for {method} {path}")

        return await call_next(request)

    @staticmethod
    def _unauthorized(message: str) -> JSONResponse:
        return JSONResponse(
            ApiResponse.fail(message, code="AUTHENTICATION_ERROR").model_dump(),
            status_code=401,
        )
