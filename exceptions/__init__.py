"""
Custom exceptions module.

Base classes map onto HTTP status codes; import-specific errors cover the
structural, gating and commit failures of a spreadsheet import.
"""

from exceptions.errors import (
    # Base exceptions
    AppError,
    NotFoundError,
    ValidationError,
    ConflictError,
    ExternalServiceError,
    DatabaseError,

    # Users
    UserNotFoundError,

    # Spreadsheet import
    SpreadsheetParseError,
    NothingToImportError,
    InvalidImportStageError,
    ImportPreviewNotFoundError,
    ImportCommitError,
)

__all__ = [
    # Base
    "AppError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "ExternalServiceError",
    "DatabaseError",

    # Users
    "UserNotFoundError",

    # Spreadsheet import
    "SpreadsheetParseError",
    "NothingToImportError",
    "InvalidImportStageError",
    "ImportPreviewNotFoundError",
    "ImportCommitError",
]
