"""
Training Sheets API Router

Endpoints:
- GET /           - Available sheets (id, name, public_name), newest first
- GET /{id}       - Full sheet: days -> entries -> exercise + method
- POST /          - Create sheet with nested days
- PUT /{id}       - Replace sheet and its days
- DELETE /{id}    - Delete sheet (schedule days using it become rest days)
"""

from fastapi import APIRouter, Depends

from core.exceptions import TrainingSheetNotFoundError
from core.logging import get_logger
from core.responses import ApiResponse
from models.requests.planning import TrainingSheetCreate
from repositories import TrainingSheetsRepository
from .dependencies import get_sheets_repo

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
def get_training_sheets(repo: TrainingSheetsRepository = Depends(get_sheets_repo)):
    return ApiResponse.ok(repo.list_summaries())


@router.get("/{sheet_id}")
def get_training_sheet(sheet_id: int, repo: TrainingSheetsRepository = Depends(get_sheets_repo)):
    return ApiResponse.ok(repo.get_details(sheet_id))


@router.post("", status_code=201)
def create_training_sheet(data: TrainingSheetCreate, repo: TrainingSheetsRepository = Depends(get_sheets_repo)):
    return ApiResponse.ok(repo.create_sheet(data))


@router.put("/{sheet_id}")
def replace_training_sheet(
    sheet_id: int,
    data: TrainingSheetCreate,
    repo: TrainingSheetsRepository = Depends(get_sheets_repo),
):
    return ApiResponse.ok(repo.replace_sheet(sheet_id, data))


@router.delete("/{sheet_id}")
def delete_training_sheet(sheet_id: int, repo: TrainingSheetsRepository = Depends(get_sheets_repo)):
    if not repo.delete(sheet_id):
        raise TrainingSheetNotFoundError(sheet_id)
    return ApiResponse.ok({"id": sheet_id, "deleted": True})
