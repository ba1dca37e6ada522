"""
Builds proposal records from accepted spreadsheet rows.

A synthesized proposal satisfies every rule of a stored proposal, so
committing the import is a plain append.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta

from models.proposal import (
    Proposal,
    ProposalItem,
    ProposalModality,
    ProposalStatus,
    ProposalType,
    ReservationStatus,
    WithdrawalType,
)
from models.user import User

# Defaults that mark a record as coming from the quick event import
IMPORT_COMPANY = "Importado via Info Evento"
IMPORT_RESPONSIBLE = "Automático"
IMPORT_EMAIL = "import@sistema.com"
IMPORT_GROUP_TYPE = "Geral"
IMPORT_OBSERVATIONS = "Importação rápida de Informações de Evento"


@dataclass(frozen=True)
class ImportContext:
    """
    Everything about the import that is not in the row itself.

    Fixing imported_at makes classification a pure function of the rows:
    same rows + same context -> same candidates, ids included.
    """
    user: User
    imported_at: datetime
    return_days: int = 1
    reminder_days: int = 3

    @property
    def import_date(self) -> date:
        return self.imported_at.date()

    @property
    def return_date(self) -> date:
        """Follow-up date; in the future so a fresh import is never overdue."""
        return self.import_date + timedelta(days=self.return_days)

    @property
    def id_prefix(self) -> str:
        return f"EVENT-{int(self.imported_at.timestamp() * 1000)}"


def proposal_id_for(context: ImportContext, position: int) -> str:
    """Time-based id, unique per data row within one import."""
    return f"{context.id_prefix}-{position}"


def synthesize_proposal(
    *,
    context: ImportContext,
    position: int,
    event: str,
    city: str,
    praca_code: str,
    observation: str,
    slots: int,
    unit_value: float,
    total_value: float,
) -> Proposal:
    """
    Create a single-item proposal for one event row.

    Args:
        context: Acting user and import time
        position: 0-based data row position (used in the id)
        event: Event name (already trimmed, never blank)
        city: "Cidade / Praça" text as written
        praca_code: "Sigla da Praça" text as written
        observation: "Observações" text as written
        slots: Whole number of slots (> 0)
        unit_value: Price per slot (> 0)
        total_value: slots * unit_value

    Returns:
        Proposal ready to be appended to the store
    """
    proposal_id = proposal_id_for(context, position)
    user = context.user

    item = ProposalItem(
        id=f"ITEM-{proposal_id}",
        proposal_id=proposal_id,
        event=event,
        city=city,
        sigla=praca_code,
        unit_value=unit_value,
        total_value=total_value,
        slots=slots,
        payment_deadline=None,
        withdrawal_type=WithdrawalType.INDIVIDUAL,
        observation=observation,
    )

    return Proposal(
        id=proposal_id,
        company=IMPORT_COMPANY,
        responsible=IMPORT_RESPONSIBLE,
        email=IMPORT_EMAIL,
        phone="",
        group_type=IMPORT_GROUP_TYPE,
        type=ProposalType.COMPANY,
        modality=ProposalModality.INDIVIDUAL,
        status=ProposalStatus.PRIMEIRA_PROPOSTA,
        sent_date=context.import_date,
        return_date=context.return_date,
        last_contact=context.import_date,
        reservation=ReservationStatus.NAO,
        observations=IMPORT_OBSERVATIONS,
        items=[item],
        responsible_executive_id=user.id,
        owner_user_id=user.id,
        praca_id=praca_code.strip() or user.praca_padrao_id,
        upload_deadline=None,
        reminder_days=context.reminder_days,
        package_items=[],
    )
