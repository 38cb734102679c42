"""
Server-rendered pages.

Every page except login/register is gated by require_page_session:
unauthenticated requests are redirected to the login page.
List pages filter by `q` (name/description) and paginate with `page`.
Markup lives in templates/ and is rendered by Jinja2 with autoescaping.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError as PydanticValidationError

from core.config import settings
from core.exceptions import AppException, InvalidCredentialsError
from core.logging import get_logger
from models.domain.user import PageSession
from models.requests.auth import LoginRequest, RegisterRequest
from repositories import (
    ExercisesRepository,
    MethodsRepository,
    SchedulesRepository,
    TrainingSheetsRepository,
    UsersRepository,
)
from services.auth import (
    authenticate,
    clear_session_cookie,
    create_access_token,
    hash_password,
    redirect_if_authenticated,
    require_page_session,
    set_session_cookie,
)
from services.pagination import Paginator, filter_items
from utils.video import resolve_video_embed
from .dependencies import (
    get_exercises_repo,
    get_methods_repo,
    get_schedules_repo,
    get_sheets_repo,
    get_users_repo,
)

logger = get_logger(__name__)
router = APIRouter(include_in_schema=False)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

WEEK_DAY_NAMES = {1: "Monday", 2: "Tuesday", 3: "Wednesday", 4: "Thursday", 5: "Friday", 6: "Saturday", 7: "Sunday"}


# ============================================================
# Rendering helpers
# ============================================================

def _render(request: Request, template: str, title: str, status_code: int = 200, **context: Any):
    context.setdefault("session", None)
    return templates.TemplateResponse(
        request, template, {"title": title, **context}, status_code=status_code
    )


def _page_url(path: str, page: int, q: Optional[str]) -> str:
    params: Dict[str, Any] = {"page": page}
    if q:
        params["q"] = q
    return f"{path}?{urlencode(params)}"


def _catalogue_page(
    request: Request,
    title: str,
    path: str,
    singular: str,
    items: Sequence,
    q: Optional[str],
    page: int,
    page_size: int,
    session: PageSession,
    notice: Optional[str],
    tags=lambda item: [],
):
    """Search box, paginated cards with view/delete actions."""
    paginator = Paginator(filter_items(items, q), page_size=page_size)
    paginator.set_page(page)

    cards = [{"item": item, "tags": tags(item)} for item in paginator.current_page_items]
    return _render(
        request, "catalogue.html", title,
        session=session,
        notice=notice,
        path=path,
        singular=singular,
        q=q,
        cards=cards,
        paginator=paginator,
        previous_url=_page_url(path, paginator.current_page - 1, q) if paginator.has_previous else None,
        next_url=_page_url(path, paginator.current_page + 1, q) if paginator.has_next else None,
    )


def _delete_and_redirect(repo, item_id: int, path: str, singular: str) -> RedirectResponse:
    try:
        deleted = repo.delete(item_id)
        message = f"{singular.capitalize()} deleted" if deleted else f"{singular.capitalize()} not found"
    except AppException as e:
        logger.warning(f"Page delete of {singular} {item_id} failed: {e.message}")
        message = f"Could not delete the {singular}."
    return RedirectResponse(f"{path}?{urlencode({'notice': message})}", status_code=303)


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ()))
    return f"{field}: {error.get('msg', 'invalid value')}" if field else error.get("msg", "Invalid value")


# ============================================================
# Auth pages
# ============================================================

def _login_form(request: Request, error: Optional[str] = None, status_code: int = 200, **values: Any):
    return _render(
        request, "auth.html", "Log in", status_code,
        action="/login", with_name=False, notice=error, **values,
    )


def _register_form(request: Request, error: Optional[str] = None, status_code: int = 200, **values: Any):
    return _render(
        request, "auth.html", "Create account", status_code,
        action="/register", with_name=True, notice=error, **values,
    )


def _start_session(user, destination: str) -> RedirectResponse:
    response = RedirectResponse(destination, status_code=303)
    set_session_cookie(response, create_access_token(user))
    return response


@router.get("/")
def root():
    return RedirectResponse(settings.home_path, status_code=303)


@router.get("/login", dependencies=[Depends(redirect_if_authenticated)])
def login_page(request: Request):
    return _login_form(request)


@router.post("/login")
def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    repo: UsersRepository = Depends(get_users_repo),
):
    try:
        data = LoginRequest(email=email.strip(), password=password)
        user = authenticate(repo, data.email, data.password)
    except (PydanticValidationError, InvalidCredentialsError):
        return _login_form(request, InvalidCredentialsError().message, 401, email=email)
    return _start_session(user, settings.home_path)


@router.get("/register", dependencies=[Depends(redirect_if_authenticated)])
def register_page(request: Request):
    return _register_form(request)


@router.post("/register")
def register_submit(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    password: str = Form(...),
    repo: UsersRepository = Depends(get_users_repo),
):
    """Same validation as the JSON register endpoint; errors re-render the form."""
    try:
        data = RegisterRequest(name=name, email=email.strip(), password=password)
    except PydanticValidationError as e:
        return _register_form(request, _first_error(e), 422, name=name, email=email)
    try:
        user = repo.create_user(data.email, data.name, hash_password(data.password))
    except AppException as e:
        return _register_form(request, e.message, e.status_code, name=name, email=email)
    return _start_session(user, settings.home_path)


@router.get("/logout")
def logout():
    response = RedirectResponse(settings.login_path, status_code=303)
    clear_session_cookie(response)
    return response


# ============================================================
# App pages
# ============================================================

@router.get("/home")
def home_page(
    request: Request,
    session: PageSession = Depends(require_page_session),
    exercises_repo: ExercisesRepository = Depends(get_exercises_repo),
    methods_repo: MethodsRepository = Depends(get_methods_repo),
):
    return _render(
        request, "home.html", "Home",
        session=session,
        exercises_count=exercises_repo.count(),
        methods_count=methods_repo.count(),
    )


def _exercise_tags(exercise) -> List[str]:
    tags = [t for t in (exercise.muscle_group, exercise.equipment) if t]
    if exercise.has_video:
        tags.append("video")
    return tags


@router.get("/exercises")
def exercises_page(
    request: Request,
    q: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    notice: Optional[str] = Query(None, max_length=200),
    session: PageSession = Depends(require_page_session),
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    return _catalogue_page(
        request, "Exercises", "/exercises", "exercise", repo.list_by_name(), q, page,
        settings.exercises_per_page, session, notice, _exercise_tags,
    )


@router.get("/exercises/{exercise_id}")
def exercise_detail_page(
    request: Request,
    exercise_id: int,
    session: PageSession = Depends(require_page_session),
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    exercise = repo.get_by_id_or_raise(exercise_id)
    return _render(
        request, "detail.html", exercise.name,
        session=session,
        description=exercise.description,
        embed=resolve_video_embed(exercise.video_url),
    )


@router.post("/exercises/{exercise_id}/delete", dependencies=[Depends(require_page_session)])
def exercise_delete(
    exercise_id: int,
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    return _delete_and_redirect(repo, exercise_id, "/exercises", "exercise")


@router.get("/methods")
def methods_page(
    request: Request,
    q: Optional[str] = Query(None, max_length=200),
    page: int = Query(1, ge=1),
    notice: Optional[str] = Query(None, max_length=200),
    session: PageSession = Depends(require_page_session),
    repo: MethodsRepository = Depends(get_methods_repo),
):
    return _catalogue_page(
        request, "Methods", "/methods", "method", repo.list_by_name(), q, page,
        settings.methods_per_page, session, notice,
    )


@router.get("/methods/{method_id}")
def method_detail_page(
    request: Request,
    method_id: int,
    session: PageSession = Depends(require_page_session),
    repo: MethodsRepository = Depends(get_methods_repo),
):
    method = repo.get_by_id_or_raise(method_id)
    return _render(request, "detail.html", method.name, session=session, description=method.description)


@router.post("/methods/{method_id}/delete", dependencies=[Depends(require_page_session)])
def method_delete(
    method_id: int,
    repo: MethodsRepository = Depends(get_methods_repo),
):
    return _delete_and_redirect(repo, method_id, "/methods", "method")


@router.get("/training-sheets")
def training_sheets_page(
    request: Request,
    session: PageSession = Depends(require_page_session),
    repo: TrainingSheetsRepository = Depends(get_sheets_repo),
):
    return _render(
        request, "training_sheets.html", "Training sheets",
        session=session, sheets=repo.list_summaries(),
    )


@router.get("/training-sheets/{sheet_id}")
def training_sheet_detail_page(
    request: Request,
    sheet_id: int,
    session: PageSession = Depends(require_page_session),
    repo: TrainingSheetsRepository = Depends(get_sheets_repo),
):
    sheet = repo.get_details(sheet_id)
    return _render(request, "training_sheet.html", sheet.display_name, session=session, sheet=sheet)


@router.get("/schedules")
def schedules_page(
    request: Request,
    session: PageSession = Depends(require_page_session),
    repo: SchedulesRepository = Depends(get_schedules_repo),
    sheets_repo: TrainingSheetsRepository = Depends(get_sheets_repo),
):
    sheet_names = {s.id: s.public_name or s.name for s in sheets_repo.list_summaries()}
    blocks = []
    for schedule in repo.get_all():
        days = []
        for number, day_name in WEEK_DAY_NAMES.items():
            week_day = schedule.day(number)
            if week_day is None or week_day.is_rest_day:
                label = week_day.custom_name if week_day and week_day.custom_name else "Rest"
            else:
                label = week_day.custom_name or sheet_names.get(week_day.training_sheet_id, "?")
            days.append((day_name, label))
        blocks.append({"schedule": schedule, "days": days})
    return _render(request, "schedules.html", "Schedules", session=session, schedules=blocks)
