"""
Methods API Router
CRUD operations for training methods
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from core.config import settings
from core.exceptions import MethodNotFoundError, ValidationError
from core.logging import get_logger
from core.responses import ApiResponse
from models.requests.catalogue import MethodCreate, MethodUpdate
from repositories import MethodsRepository
from services.pagination import paginate
from .dependencies import get_methods_repo

logger = get_logger(__name__)
router = APIRouter()


@router.get("")
def get_methods(
    q: Optional[str] = Query(None, max_length=200),
    page: Optional[int] = Query(None, ge=1),
    per_page: int = Query(settings.default_per_page, ge=1, le=100),
    repo: MethodsRepository = Depends(get_methods_repo),
):
    """Get all methods ordered by name."""
    methods = repo.list_by_name(search=q)
    if page is None:
        return ApiResponse.ok(methods)
    items, meta = paginate(methods, page, per_page)
    return ApiResponse.ok(items, meta=meta.model_dump())


@router.get("/{method_id}")
def get_method(method_id: int, repo: MethodsRepository = Depends(get_methods_repo)):
    return ApiResponse.ok(repo.get_by_id_or_raise(method_id))


@router.post("", status_code=201)
def create_method(data: MethodCreate, repo: MethodsRepository = Depends(get_methods_repo)):
    method = repo.create(data.model_dump())
    logger.info(f"Created method: {method.name} ({method.id})")
    return ApiResponse.ok(method)


@router.put("/{method_id}")
def replace_method(method_id: int, data: MethodCreate, repo: MethodsRepository = Depends(get_methods_repo)):
    return ApiResponse.ok(repo.update(method_id, data.model_dump()))


@router.patch("/{method_id}")
def update_method(method_id: int, data: MethodUpdate, repo: MethodsRepository = Depends(get_methods_repo)):
    update_data = data.model_dump(exclude_unset=True)
    if not update_data:
        raise ValidationError("No fields to update")
    if "name" in update_data and update_data["name"] is None:
        raise ValidationError("name cannot be null", field="name")
    if "description" in update_data and update_data["description"] is None:
        update_data["description"] = ""
    return ApiResponse.ok(repo.update(method_id, update_data))


@router.delete("/{method_id}")
def delete_method(method_id: int, repo: MethodsRepository = Depends(get_methods_repo)):
    """Delete a method. Fails with 409 while a training sheet uses it."""
    if not repo.delete(method_id):
        raise MethodNotFoundError(method_id)
    return ApiResponse.ok({"id": method_id, "deleted": True})
