"""
Custom exception classes for the application.

Every error that can reach the API boundary inherits from AppError,
so routes can turn it into the standard error response.
"""

from typing import Optional, Any
from datetime import datetime, timezone


class AppError(Exception):
    """
    Base exception for all application errors.

    All custom exceptions inherit from this.

    Attributes:
        code: Error code (e.g., "PROPOSAL_NOT_FOUND")
        message: Human-readable message
        status_code: HTTP status code
        details: Additional context
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        self.timestamp = datetime.now(timezone.utc).isoformat()
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to API response format."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details,
                "timestamp": self.timestamp
            }
        }


class NotFoundError(AppError):
    """Resource not found (404)."""

    def __init__(
        self,
        resource: str,
        identifier: str,
        code: Optional[str] = None
    ):
        super().__init__(
            code=code or f"{resource.upper()}_NOT_FOUND",
            message=f"{resource} not found",
            status_code=404,
            details={"id": identifier}
        )


class ValidationError(AppError):
    """Validation failed (422)."""

    def __init__(
        self,
        message: str,
        code: str = "VALIDATION_ERROR",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=422,
            details=details
        )


class ConflictError(AppError):
    """Conflict with the current state of a resource (409)."""

    def __init__(
        self,
        message: str,
        code: str = "CONFLICT",
        details: Optional[dict] = None
    ):
        super().__init__(
            code=code,
            message=message,
            status_code=409,
            details=details
        )


class ExternalServiceError(AppError):
    """External service failure (503)."""

    def __init__(
        self,
        service: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code=f"{service.upper()}_ERROR",
            message=message,
            status_code=503,
            details={"service": service, **(details or {})}
        )


class DatabaseError(AppError):
    """Database operation failed (500)."""

    def __init__(
        self,
        operation: str,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="DATABASE_ERROR",
            message=f"Database {operation} failed: {message}",
            status_code=500,
            details={"operation": operation, **(details or {})}
        )


# ===================
# USER ERRORS
# ===================

class UserNotFoundError(NotFoundError):
    """User not found or inactive."""

    def __init__(self, user_id: str):
        super().__init__(
            resource="User",
            identifier=user_id,
            code="USER_NOT_FOUND"
        )


# ===================
# SPREADSHEET IMPORT ERRORS
# ===================

class SpreadsheetParseError(ValidationError):
    """The uploaded file could not be read as a spreadsheet at all."""

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None
    ):
        super().__init__(
            code="SPREADSHEET_PARSE_ERROR",
            message=message,
            details=details
        )


class NothingToImportError(ValidationError):
    """Confirmation requested while the preview has no valid rows."""

    def __init__(self, errors_count: int = 0):
        super().__init__(
            code="NOTHING_TO_IMPORT",
            message="Nenhuma linha válida para importar.",
            details={"errors_count": errors_count}
        )


class InvalidImportStageError(ConflictError):
    """Action not allowed in the current import stage."""

    def __init__(self, current_stage: str, action: str):
        super().__init__(
            code="INVALID_IMPORT_STAGE",
            message=f"Cannot {action} while import is in stage '{current_stage}'",
            details={"current_stage": current_stage, "action": action}
        )


class ImportPreviewNotFoundError(NotFoundError):
    """Import preview expired or never existed."""

    def __init__(self, preview_id: str):
        super().__init__(
            resource="Import preview",
            identifier=preview_id,
            code="IMPORT_PREVIEW_NOT_FOUND"
        )


class ImportCommitError(AppError):
    """Appending the imported proposals to the store failed."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(
            code="IMPORT_COMMIT_FAILED",
            message=message,
            status_code=500,
            details=details
        )
