"""
Proposal schemas for validation and serialization.

A proposal is a commercial offer to one company: contact data, status,
follow-up dates and the events (with slots and unit price) being offered.
"""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import Field

from models.base import BaseSchema, RecordSchema


class ProposalStatus(str, Enum):
    """Sales funnel status."""
    PRIMEIRA_PROPOSTA = "Primeira proposta"
    PENDENTE = "Pendente"
    EM_ANDAMENTO = "Em Andamento"
    NEGATIVA = "Negativa"
    CONCLUIDA = "Concluída"


class ProposalType(str, Enum):
    COMPANY = "Company"
    INDIVIDUAL = "Individual"
    PATROCINIO = "Patrocínio"


class ProposalModality(str, Enum):
    INDIVIDUAL = "Individual"
    PACOTE = "Pacote"


class ReservationStatus(str, Enum):
    SIM = "Sim"
    NAO = "Não"
    PARCIAL = "Parcial"


class PaymentMethod(str, Enum):
    BOLETO = "Boleto"
    PIX = "Pix"
    CARTAO = "Cartão"
    FATURADO = "Faturado"
    PARCELADO = "Parcelado"


class WithdrawalType(str, Enum):
    """How registration kits are picked up."""
    INDIVIDUAL = "Individual"
    GRUPO = "Grupo"


class ProposalItem(RecordSchema):
    """
    One event line of a proposal.

    total_value is always slots * unit_value; the import never trusts a
    total typed into the spreadsheet.
    """

    id: str = Field(..., description="Item identifier")
    proposal_id: str = Field(..., description="Owning proposal")
    event: str = Field(..., description="Event name")
    city: str = Field("", description="City / praça as written")
    sigla: str = Field("", description="Praça code as written")
    unit_value: float = Field(..., gt=0, allow_inf_nan=False, description="Price per slot")
    total_value: float = Field(..., ge=0, allow_inf_nan=False, description="slots x unit_value, rounded to cents")
    slots: int = Field(..., gt=0, description="Number of registrations")
    payment_deadline: Optional[date] = Field(None, description="Payment due date")
    withdrawal_type: WithdrawalType = Field(WithdrawalType.INDIVIDUAL)
    observation: str = Field("", description="Free text from the sheet")

    @property
    def value(self) -> float:
        return self.total_value


class ProposalPackageItem(RecordSchema):
    """Event reservation inside a package proposal."""

    event_id: str
    quantidade_vagas: int = Field(..., ge=0)
    valor_unitario: float = Field(..., ge=0, allow_inf_nan=False)
    data_limite_inscricao: Optional[date] = None
    data_limite_pagamento: Optional[date] = None

    @property
    def value(self) -> float:
        return self.quantidade_vagas * self.valor_unitario


class Proposal(RecordSchema):
    """
    Stored proposal record.

    Used both for records read from the store and for candidates
    synthesized by the spreadsheet import, so a candidate that validates
    here can be appended without further checks.
    """

    id: str = Field(..., min_length=1, description="Proposal identifier")
    company: str = Field(..., min_length=1)
    responsible: str = Field("")
    email: str = Field("")
    phone: str = Field("")
    group_type: str = Field("")
    type: ProposalType = Field(ProposalType.COMPANY)
    modality: ProposalModality = Field(ProposalModality.INDIVIDUAL)
    status: ProposalStatus = Field(ProposalStatus.PRIMEIRA_PROPOSTA)
    sent_date: date
    return_date: date
    last_contact: date
    reservation: ReservationStatus = Field(ReservationStatus.NAO)
    observations: str = Field("")
    items: list[ProposalItem] = Field(default_factory=list)
    payment_method: Optional[PaymentMethod] = None
    withdrawal_type: Optional[WithdrawalType] = None
    responsible_executive_id: str = Field("", description="Legacy owner field")
    owner_user_id: str = Field(..., min_length=1)
    praca_id: str = Field(..., min_length=1)
    upload_deadline: Optional[date] = None
    reminder_days: int = Field(3, ge=0)
    package_items: list[ProposalPackageItem] = Field(default_factory=list)

    @property
    def total_value(self) -> float:
        """Value of every event offered, package and line items alike."""
        return (
            sum(pi.value for pi in self.package_items)
            + sum(item.value for item in self.items)
        )

    @property
    def total_slots(self) -> int:
        return (
            sum(pi.quantidade_vagas for pi in self.package_items)
            + sum(item.slots for item in self.items)
        )

    def is_overdue(self, today: date) -> bool:
        """Follow-up date passed and the deal is still open."""
        return self.return_date < today and self.status != ProposalStatus.CONCLUIDA


class ProposalListResponse(BaseSchema):
    """List of proposals."""

    data: list[Proposal]
    total: int
