"""
Pydantic models for validation and serialization.

Import API schemas live in models.importing, which depends on the
import session and is not re-exported here.
"""

from models.base import (
    BaseSchema,
    RecordSchema,
)
from models.proposal import (
    ProposalStatus,
    ProposalType,
    ProposalModality,
    ReservationStatus,
    PaymentMethod,
    WithdrawalType,
    ProposalItem,
    ProposalPackageItem,
    Proposal,
    ProposalListResponse,
)
from models.user import (
    UserRole,
    User,
)
from models.dashboard import (
    DashboardStats,
    AuditRequest,
    AuditResponse,
)

__all__ = [
    "BaseSchema",
    "RecordSchema",
    "ProposalStatus",
    "ProposalType",
    "ProposalModality",
    "ReservationStatus",
    "PaymentMethod",
    "WithdrawalType",
    "ProposalItem",
    "ProposalPackageItem",
    "Proposal",
    "ProposalListResponse",
    "UserRole",
    "User",
    "DashboardStats",
    "AuditRequest",
    "AuditResponse",
]
