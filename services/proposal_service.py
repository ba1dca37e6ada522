"""
Proposal store.

Reads proposals for the dashboard and appends imported ones.
"""

from typing import Optional
import structlog

from config import get_supabase_client
from models.proposal import Proposal
from exceptions import DatabaseError

logger = structlog.get_logger(__name__)


class ProposalService:
    """
    Proposal persistence over the Supabase "proposals" table.

    Records are stored as the JSON dump of the Proposal model, items
    and package items included.
    """

    def __init__(self):
        self.db = get_supabase_client()
        self.table = "proposals"

    # ===================
    # READ OPERATIONS
    # ===================

    def get_all(
        self,
        praca_id: Optional[str] = None,
        owner_user_id: Optional[str] = None,
    ) -> list[Proposal]:
        """
        Get all proposals with optional filters.

        Args:
            praca_id: Only proposals of this praça
            owner_user_id: Only proposals owned by this user

        Returns:
            List of proposals, most recently sent first
        """
        logger.info(
            "getting_proposals",
            praca_id=praca_id,
            owner_user_id=owner_user_id
        )

        try:
            query = self.db.table(self.table).select("*")

            if praca_id:
                query = query.eq("praca_id", praca_id)
            if owner_user_id:
                query = query.eq("owner_user_id", owner_user_id)

            result = query.order("sent_date", desc=True).execute()

            proposals = [Proposal(**row) for row in result.data]

            logger.info("proposals_retrieved", count=len(proposals))

            return proposals

        except Exception as e:
            logger.error("get_proposals_failed", error=str(e))
            raise DatabaseError("select", str(e))

    # ===================
    # WRITE OPERATIONS
    # ===================

    def append_many(self, proposals: list[Proposal]) -> list[Proposal]:
        """
        Append new proposals in one insert.

        A single request keeps the batch all-or-nothing from the
        caller's point of view: either every record is stored or the
        call raises and none is.

        Args:
            proposals: Fully validated proposals

        Returns:
            The appended proposals

        Raises:
            DatabaseError: If the insert fails
        """
        if not proposals:
            return []

        logger.info("appending_proposals", count=len(proposals))

        rows = [p.model_dump(mode="json") for p in proposals]

        try:
            self.db.table(self.table).insert(rows).execute()
        except Exception as e:
            logger.error(
                "append_proposals_failed",
                count=len(proposals),
                error=str(e)
            )
            raise DatabaseError("insert", str(e), details={"count": len(proposals)})

        logger.info("proposals_appended", count=len(proposals))

        return proposals


# Singleton instance for convenience
_proposal_service: Optional[ProposalService] = None


def get_proposal_service() -> ProposalService:
    """Get or create ProposalService instance."""
    global _proposal_service
    if _proposal_service is None:
        _proposal_service = ProposalService()
    return _proposal_service
