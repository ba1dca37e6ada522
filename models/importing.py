"""
Spreadsheet import API schemas.
"""

from typing import Any, Optional

from pydantic import Field

from models.base import BaseSchema
from models.proposal import Proposal
from parsers.batch_validator import ImportStatus
from services.import_session_service import ImportSession, ImportStage


class ImportErrorSchema(BaseSchema):
    """Value that blocks its row."""
    row: int
    column: str
    reason: str


class ImportCorrectionSchema(BaseSchema):
    """Value that was fixed automatically."""
    row: int
    column: str
    original: Any = None
    corrected: Any = None
    reason: str


class ImportSummarySchema(BaseSchema):
    total_analyzed: int = Field(..., ge=0)
    new_proposals: int = Field(..., ge=0)
    updated_proposals: int = Field(..., ge=0)
    total_items: int = Field(..., ge=0)
    corrections_count: int = Field(..., ge=0)
    errors_count: int = Field(..., ge=0)
    status: ImportStatus
    message: str


class ImportPreviewResponse(BaseSchema):
    """What the user reviews before confirming."""
    preview_id: str
    stage: ImportStage
    sheet_name: Optional[str] = None
    can_confirm: bool
    summary: ImportSummarySchema
    errors: list[ImportErrorSchema]
    corrections: list[ImportCorrectionSchema]
    candidates: list[Proposal]
    expires_in_minutes: int


class ImportResultResponse(BaseSchema):
    """Outcome of a confirmed import."""
    success: bool
    stage: ImportStage
    summary: ImportSummarySchema
    proposals: list[Proposal]


def build_preview_response(
    preview_id: str,
    session: ImportSession,
    expires_in_minutes: int,
) -> ImportPreviewResponse:
    return ImportPreviewResponse(
        preview_id=preview_id,
        stage=session.stage,
        sheet_name=session.sheet_name,
        can_confirm=session.can_confirm,
        summary=ImportSummarySchema.model_validate(session.summary),
        errors=[ImportErrorSchema.model_validate(e) for e in session.errors],
        corrections=[ImportCorrectionSchema.model_validate(c) for c in session.corrections],
        candidates=session.candidates,
        expires_in_minutes=expires_in_minutes,
    )


def build_result_response(session: ImportSession) -> ImportResultResponse:
    return ImportResultResponse(
        success=True,
        stage=session.stage,
        summary=ImportSummarySchema.model_validate(session.summary),
        proposals=session.committed,
    )
