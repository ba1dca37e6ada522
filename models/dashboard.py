"""
Dashboard schemas.
"""

from datetime import date
from typing import Optional

from pydantic import Field

from models.base import BaseSchema


class DashboardStats(BaseSchema):
    """Aggregates over the visible proposals."""

    total_count: int = Field(..., ge=0)
    by_status: dict[str, int] = Field(..., description="Count per status, every status present")
    total_value: float = Field(..., ge=0)
    total_slots: int = Field(..., ge=0)
    follow_ups_today: int = Field(..., ge=0)
    follow_ups_delayed: int = Field(..., ge=0)
    sent_count: int = Field(..., ge=0)
    approved_count: int = Field(..., ge=0)
    total_proposed_value: float = Field(..., ge=0)
    total_approved_value: float = Field(..., ge=0)
    as_of: date


class AuditRequest(BaseSchema):
    """Filters for the narrative audit."""

    praca_id: Optional[str] = None
    owner_user_id: Optional[str] = None


class AuditResponse(BaseSchema):
    report: str
    proposals_analyzed: int
    as_of: date
