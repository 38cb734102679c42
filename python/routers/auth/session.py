"""
Session Authentication Router

Login and registration set the session cookie (JWT) and also return the
token so non-browser clients can send it as a bearer header.
"""

from fastapi import APIRouter, Depends, Response

from core.logging import get_logger
from core.responses import ApiResponse
from models.domain.user import PageSession
from models.requests.auth import LoginRequest, RegisterRequest
from repositories import UsersRepository
from services.auth import (
    authenticate,
    clear_session_cookie,
    create_access_token,
    hash_password,
    require_api_session,
    set_session_cookie,
)
from routers.dependencies import get_users_repo

logger = get_logger(__name__)
router = APIRouter()


@router.post("/register", status_code=201)
def register(data: RegisterRequest, response: Response, repo: UsersRepository = Depends(get_users_repo)):
    """Create an account and start a session."""
    user = repo.create_user(data.email, data.name, hash_password(data.password))
    token = create_access_token(user)
    set_session_cookie(response, token)
    logger.info(f"Registered user {user.id}")
    return ApiResponse.ok({"user": user, "token": token})


@router.post("/login")
def login(data: LoginRequest, response: Response, repo: UsersRepository = Depends(get_users_repo)):
    user = authenticate(repo, data.email, data.password)
    token = create_access_token(user)
    set_session_cookie(response, token)
    return ApiResponse.ok({"user": user, "token": token})


@router.post("/logout")
def logout(response: Response):
    clear_session_cookie(response)
    return ApiResponse.ok({"logged_out": True})


@router.get("/session")
def get_session(session: PageSession = Depends(require_api_session)):
    """Minimized session (id, email, name) of the current user."""
    return ApiResponse.ok(session)
