"""
Business logic services.

Each service handles one domain area.
"""

from services.proposal_service import ProposalService, get_proposal_service
from services.user_service import UserService, get_user_service
from services.import_session_service import ImportSession, ImportStage
from services.template_service import TemplateService, get_template_service
from services.dashboard_service import compute_dashboard_stats, filter_proposals
from services.audit_service import AuditService, get_audit_service

__all__ = [
    "ProposalService",
    "get_proposal_service",
    "UserService",
    "get_user_service",
    "ImportSession",
    "ImportStage",
    "TemplateService",
    "get_template_service",
    "compute_dashboard_stats",
    "filter_proposals",
    "AuditService",
    "get_audit_service",
]
