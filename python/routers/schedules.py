"""
Training Schedules API Router
Weekly plans assigning training sheets to days 1-7
"""

from fastapi import APIRouter, Depends

from core.exceptions import ScheduleNotFoundError
from core.logging import get_logger
from core.responses import ApiResponse
from models.requests.planning import TrainingScheduleCreate
from repositories import SchedulesRepository
from .dependencies import get_schedules_repo

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
def get_schedules(repo: SchedulesRepository = Depends(get_schedules_repo)):
    """Get all schedules, newest first."""
    return ApiResponse.ok(repo.get_all())


@router.get("/{schedule_id}")
def get_schedule(schedule_id: int, repo: SchedulesRepository = Depends(get_schedules_repo)):
    return ApiResponse.ok(repo.get_by_id_or_raise(schedule_id))


@router.post("", status_code=201)
def save_schedule(data: TrainingScheduleCreate, repo: SchedulesRepository = Depends(get_schedules_repo)):
    """Save a week plan. Referenced training sheets must exist."""
    return ApiResponse.ok(repo.create_schedule(data))


@router.put("/{schedule_id}")
def replace_schedule(
    schedule_id: int,
    data: TrainingScheduleCreate,
    repo: SchedulesRepository = Depends(get_schedules_repo),
):
    return ApiResponse.ok(repo.replace_schedule(schedule_id, data))


@router.delete("/{schedule_id}")
def delete_schedule(schedule_id: int, repo: SchedulesRepository = Depends(get_schedules_repo)):
    if not repo.delete(schedule_id):
        raise ScheduleNotFoundError(schedule_id)
    return ApiResponse.ok({"id": schedule_id, "deleted": True})
