"""
Dashboard API routes.

Aggregates over the proposal funnel plus the AI narrative audit.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
from datetime import date
import structlog

from models.dashboard import AuditRequest, AuditResponse, DashboardStats
from models.proposal import Proposal
from services.audit_service import get_audit_service
from services.dashboard_service import compute_dashboard_stats, filter_proposals
from services.proposal_service import get_proposal_service
from services.user_service import get_user_service
from exceptions import AppError

logger = structlog.get_logger(__name__)

router = APIRouter()


# ===================
# EXCEPTION HANDLER
# ===================

def handle_error(e: Exception) -> JSONResponse:
    """Convert exception to JSON response."""
    if isinstance(e, AppError):
        return JSONResponse(
            status_code=e.status_code,
            content=e.to_dict()
        )
    logger.error("unexpected_error", error=str(e), type=type(e).__name__)
    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An unexpected error occurred"
            }
        }
    )


def _visible_proposals(
    praca_id: Optional[str],
    owner_user_id: Optional[str],
    viewer_id: Optional[str],
) -> list[Proposal]:
    proposals = get_proposal_service().get_all(praca_id=praca_id, owner_user_id=owner_user_id)
    viewer = get_user_service().get_by_id(viewer_id) if viewer_id else None
    return filter_proposals(proposals, praca_id, owner_user_id, viewer)


# ===================
# ROUTES
# ===================

@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    praca_id: Optional[str] = Query(None, description="Filter by praça"),
    owner_user_id: Optional[str] = Query(None, description="Filter by owner"),
    viewer_id: Optional[str] = Query(None, description="Restrict to what this user may see"),
):
    """
    Get funnel counts, values and follow-up totals.

    Follow-ups are counted against today's date.
    """
    try:
        proposals = _visible_proposals(praca_id, owner_user_id, viewer_id)
        return compute_dashboard_stats(proposals, date.today())

    except Exception as e:
        return handle_error(e)


@router.post("/audit", response_model=AuditResponse)
async def run_audit(request: Optional[AuditRequest] = None):
    """
    Generate the narrative audit for the selected proposals.

    Returns 503 when the AI provider is not configured or unreachable.
    """
    try:
        request = request or AuditRequest()
        proposals = _visible_proposals(request.praca_id, request.owner_user_id, None)
        today = date.today()

        report = get_audit_service().audit_proposals(proposals, today)

        return AuditResponse(
            report=report,
            proposals_analyzed=len(proposals),
            as_of=today,
        )

    except Exception as e:
        return handle_error(e)
