"""
Authentication service for FastAPI.

Sessions are JWTs (python-jose) carried in an HTTP-only cookie for pages,
or in an `Authorization: Bearer` header for API clients.

Page gate:
    @router.get("/exercises")
    def exercises_page(session: PageSession = Depends(require_page_session)): ...

Unauthenticated page requests raise PageRedirect, which main.py turns into
a 303 redirect to settings.login_path.
"""

import base64
import hashlib
import hmac
import os
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request, Response
from jose import JWTError, jwt

from core.config import settings
from core.exceptions import AuthenticationError, InvalidCredentialsError
from core.logging import get_logger
from models.domain.user import PageSession, User

logger = get_logger(__name__)

PBKDF2_ITERATIONS = 200_000


# ============================================================
# Passwords
# ============================================================

def hash_password(password: str, salt: Optional[bytes] = None) -> str:
    """Hash password as `pbkdf2_sha256$iterations$salt$digest` (base64 parts)."""
    salt = salt or os.urandom(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, PBKDF2_ITERATIONS)
    return "pbkdf2_sha256${}${}${}".format(
        PBKDF2_ITERATIONS,
        base64.b64encode(salt).decode(),
        base64.b64encode(digest).decode(),
    )


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt, expected = password_hash.split("$")
    except ValueError:
        return False
    if scheme != "pbkdf2_sha256":
        return False
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), base64.b64decode(salt), int(iterations)
    )
    return hmac.compare_digest(digest, base64.b64decode(expected))


# ============================================================
# Tokens
# ============================================================

def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create session JWT for a user."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(hours=settings.jwt_expiration_hours)
    )
    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> PageSession:
    """
    Decode a session token.

    Raises:
        AuthenticationError if the token is invalid, expired or has no user id
    """
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(f"Invalid or expired token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Invalid token: no user ID")

    return PageSession(
        id=str(user_id),
        email=payload.get("email") or "",
        name=payload.get("name") or "",
    )


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        settings.session_cookie_name,
        token,
        max_age=settings.jwt_expiration_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=not settings.debug and settings.api_base_url.startswith("https"),
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(settings.session_cookie_name)


def extract_token(request: Request) -> Optional[str]:
    """Session cookie first, then bearer header."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header[len("Bearer "):].strip() or None
    return None


# ============================================================
# Server-side session gate
# ============================================================

@dataclass
class AuthResult:
    authenticated: bool
    session: Optional[PageSession] = None


class PageRedirect(Exception):
    """Raised by page dependencies; handled in main.py as a 303 redirect."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(location)


def get_server_auth(request: Request) -> AuthResult:
    """
    Check whether the request carries an authenticated session.
    Failures are logged and reported as unauthenticated.
    """
    token = extract_token(request)
    if token is None:
        return AuthResult(authenticated=False)

    try:
        session = decode_session_token(token)
    except AuthenticationError as e:
        logger.warning(f"Session rejected for {request.url.path}: {e.message}")
        return AuthResult(authenticated=False)

    return AuthResult(authenticated=True, session=session)


def require_page_session(auth: AuthResult = Depends(get_server_auth)) -> PageSession:
    """
    Require authentication for a page.
    Redirects to the login page when not authenticated.
    """
    if not auth.authenticated:
        raise PageRedirect(settings.login_path)
    return auth.session


def redirect_if_authenticated(auth: AuthResult = Depends(get_server_auth)) -> None:
    """
    For auth pages (login, register): send logged-in users to home.
    """
    if auth.authenticated:
        raise PageRedirect(settings.home_path)


def require_api_session(request: Request) -> PageSession:
    """
    Session for API endpoints (set by AuthMiddleware, or decoded here).

    Raises:
        AuthenticationError if not authenticated
    """
    session = getattr(request.state, "session", None)
    if session is not None:
        return session
    auth = get_server_auth(request)
    if not auth.authenticated:
        raise AuthenticationError()
    return auth.session


def authenticate(users_repo, email: str, password: str) -> User:
    """
    Check credentials against the users table.

    Raises:
        InvalidCredentialsError on unknown email or wrong password
    """
    found = users_repo.get_with_password_hash(email)
    if found is None:
        # Unknown email still pays for one hash
        verify_password(password, hash_password("dummy-password"))
        raise InvalidCredentialsError()

    user, password_hash = found
    if not verify_password(password, password_hash):
        logger.warning(f"Failed login for {user.email}")
        raise InvalidCredentialsError()

    logger.info(f"User {user.id} logged in")
    return user
