"""
Proposal API routes.
"""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse
from typing import Optional
import structlog

from models.proposal import ProposalListResponse
from services.proposal_service import get_proposal_service
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


# ===================
# ROUTES
# ===================

@router.get("", response_model=ProposalListResponse)
async def list_proposals(
    praca_id: Optional[str] = Query(None, description="Filter by praça"),
    owner_user_id: Optional[str] = Query(None, description="Filter by owner"),
):
    """
    List proposals, most recently sent first.
    """
    try:
        service = get_proposal_service()
        proposals = service.get_all(praca_id=praca_id, owner_user_id=owner_user_id)

        return ProposalListResponse(data=proposals, total=len(proposals))

    except Exception as e:
        return handle_error(e)
