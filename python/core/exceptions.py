"""
Custom exception hierarchy for the application.
All exceptions inherit from AppException for unified handling.
"""

from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message: Human-readable error message
        code: Machine-readable error code
        status_code: HTTP status code for API responses
        details: Additional error details
    """

    def __init__(
        self,
        message: str,
        code: str = "ERROR",
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


# === Not Found Errors ===

class NotFoundError(AppException):
    """Resource not found."""

    def __init__(self, entity: str, identifier: Any = None):
        message = f"{entity} not found"
        if identifier is not None:
            message = f"{entity} '{identifier}' not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class ExerciseNotFoundError(NotFoundError):
    def __init__(self, exercise_id: int):
        super().__init__("Exercise", exercise_id)


class MethodNotFoundError(NotFoundError):
    def __init__(self, method_id: int):
        super().__init__("Method", method_id)


class TrainingSheetNotFoundError(NotFoundError):
    def __init__(self, sheet_id: int):
        super().__init__("Training sheet", sheet_id)


class ScheduleNotFoundError(NotFoundError):
    def __init__(self, schedule_id: int):
        super().__init__("Training schedule", schedule_id)


# === Validation Errors ===

class ValidationError(AppException):
    """Input validation failed."""

    def __init__(self, message: str, field: str = None, code: str = "VALIDATION_ERROR"):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code=code,
            status_code=422,
            details=details
        )


class InvalidPageSizeError(ValidationError):
    def __init__(self, page_size: Any):
        super().__init__(
            message=f"Page size must be a positive integer, got {page_size!r}",
            field="page_size"
        )


class ConflictError(AppException):
    """Resource already exists or is still referenced."""

    def __init__(self, message: str, field: str = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details
        )


# === Database Errors ===

class DatabaseError(AppException):
    """Database operation failed."""

    def __init__(self, message: str, operation: str = None):
        details = {"operation": operation} if operation else {}
        super().__init__(
            message=f"Database error: {message}",
            code="DATABASE_ERROR",
            status_code=500,
            details=details
        )


# === Authentication Errors ===

class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_ERROR",
            status_code=401
        )


class InvalidCredentialsError(AuthenticationError):
    def __init__(self):
        super().__init__(message="Invalid email or password")
