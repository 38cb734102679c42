"""
Unified API response format.
All endpoints should return ApiResponse for consistency.
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from pydantic import BaseModel, Field

T = TypeVar('T')


class ApiResponse(BaseModel, Generic[T]):
    """
    Unified API response wrapper.

    All API endpoints should return this format:
    {
        "success": true/false,
        "data": <payload or null>,
        "error": <error message or null>,
        "code": <error code for errors, null for success>,
        "meta": <optional metadata>
    }
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    code: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, data: T = None, meta: Dict[str, Any] = None) -> "ApiResponse[T]":
        """Create successful response."""
        return cls(success=True, data=data, meta=meta)

    @classmethod
    def fail(
        cls,
        message: str,
        code: str = "ERROR",
        meta: Dict[str, Any] = None,
    ) -> "ApiResponse":
        """Create error response."""
        return cls(success=False, error=message, code=code, meta=meta)

    @classmethod
    def from_exception(cls, exc: "AppException") -> "ApiResponse":
        """Create error response from AppException."""
        return cls.fail(exc.message, code=exc.code, meta=exc.details or None)


# === Pagination ===

class PaginationMeta(BaseModel):
    """Pagination metadata."""

    page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    total: int = Field(ge=0)
    total_pages: int = Field(ge=1)
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, page: int, per_page: int, total: int) -> "PaginationMeta":
        # An empty listing still has one (empty) page
        total_pages = max(1, (total + per_page - 1) // per_page)
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1
        )

