"""
Exercises API Router
CRUD operations for the exercise catalogue

Endpoints:
- GET /           - List exercises (optional q, page, per_page)
- GET /{id}       - Get exercise (with video embed info)
- POST /          - Create exercise
- PUT /{id}       - Replace exercise
- PATCH /{id}     - Partial update
- DELETE /{id}    - Delete exercise
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.config import settings
from core.exceptions import ExerciseNotFoundError, ValidationError
from core.logging import get_logger
from core.responses import ApiResponse
from models.requests.catalogue import ExerciseCreate, ExerciseUpdate
from repositories import ExercisesRepository
from services.pagination import paginate
from utils.video import resolve_video_embed
from .dependencies import get_exercises_repo

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
def get_exercises(
    q: Optional[str] = Query(None, max_length=200, description="Search name and description"),
    page: Optional[int] = Query(None, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=100),
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    """Get all exercises ordered by name. Paginated only when `page` is given."""
    exercises = repo.list_by_name(search=q)
    if page is None:
        return ApiResponse.ok(exercises)
    items, meta = paginate(exercises, page, per_page)
    return ApiResponse.ok(items, meta=meta.model_dump())


@router.get("/{exercise_id}")
def get_exercise(exercise_id: int, repo: ExercisesRepository = Depends(get_exercises_repo)):
    """Get an exercise by ID."""
    exercise = repo.get_by_id_or_raise(exercise_id)
    embed = resolve_video_embed(exercise.video_url)
    return ApiResponse.ok(exercise, meta={"video": embed._asdict() if embed else None})


@router.post("", status_code=201)
def create_exercise(data: ExerciseCreate, repo: ExercisesRepository = Depends(get_exercises_repo)):
    """Create a new exercise."""
    exercise = repo.create(data.model_dump())
    logger.info(f"Created exercise: {exercise.name} ({exercise.id})")
    return ApiResponse.ok(exercise)


@router.put("/{exercise_id}")
def replace_exercise(
    exercise_id: int,
    data: ExerciseCreate,
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    """Replace all editable fields of an exercise."""
    return ApiResponse.ok(repo.update(exercise_id, data.model_dump()))


@router.patch("/{exercise_id}")
def update_exercise(
    exercise_id: int,
    data: ExerciseUpdate,
    repo: ExercisesRepository = Depends(get_exercises_repo),
):
    """Update only the fields that were sent."""
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No fields to update")
    if "name" in update_data and update_data["name"] is None:
        raise ValidationError("name cannot be null", field="name")
    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""
    return ApiResponse.ok(repo.update(exercise_id, update_data))


@router.delete("/{exercise_id}")
def delete_exercise(exercise_id: int, repo: ExercisesRepository = Depends(get_exercises_repo)):
    """Delete an exercise. Fails with 409 while a training sheet uses it."""
    if not repo.delete(exercise_id):
        raise ExerciseNotFoundError(exercise_id)
    return ApiResponse.ok({"id": exercise_id, "deleted": True})
