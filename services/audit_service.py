"""
Narrative audit of the proposal funnel.

Sends a compact summary of the proposals to Claude and returns a short
report in Portuguese: overdue follow-ups, where the money is stuck in
the funnel, and what to chase first.
"""

import json
from datetime import date
from typing import Optional
import structlog

import anthropic

from config import settings
from exceptions import ExternalServiceError
from models.proposal import Proposal

logger = structlog.get_logger(__name__)

EMPTY_REPLY_MESSAGE = "Não foi possível gerar a análise no momento."

PROMPT_TEMPLATE = """Analise a seguinte lista de propostas comerciais B2B e forneça um breve relatório de "Auditoria Inteligente" (máximo 4 parágrafos).
Foque em:
1. Propostas com data de retorno expirada (hoje é {today}).
2. Concentração de valor no funil (qual status tem mais dinheiro parado).
3. Sugestões rápidas de priorização de follow-up.
Seja profissional e direto em português brasileiro.

Dados:
{data}
"""


def build_data_summary(proposals: list[Proposal]) -> list[dict]:
    """Only the fields the report talks about."""
    return [
        {
            "id": p.id,
            "status": p.status.value,
            "returnDate": p.return_date.isoformat(),
            "value": round(p.total_value, 2),
            "company": p.company,
        }
        for p in proposals
    ]


def build_prompt(proposals: list[Proposal], today: date) -> str:
    data = json.dumps(build_data_summary(proposals), ensure_ascii=False, indent=2)
    return PROMPT_TEMPLATE.format(today=today.isoformat(), data=data)


class AuditService:
    """
    Generate the narrative audit with the Anthropic API.

    The client is created only when an API key is configured.
    """

    def __init__(self, client: Optional[anthropic.Anthropic] = None):
        if client is not None:
            self.client = client
        elif settings.audit_configured:
            self.client = anthropic.Anthropic(api_key=settings.anthropic_api_key)
        else:
            self.client = None

    def audit_proposals(self, proposals: list[Proposal], today: date) -> str:
        """
        Produce the audit report.

        Args:
            proposals: Proposals to analyze
            today: Reference date for overdue follow-ups

        Returns:
            Report text, or a fixed message when the model replies empty

        Raises:
            ExternalServiceError: Not configured, or the API call failed
        """
        if self.client is None:
            raise ExternalServiceError(
                "anthropic",
                "AI audit not available. Set ANTHROPIC_API_KEY.",
            )

        logger.info("audit_started", proposal_count=len(proposals))

        try:
            response = self.client.messages.create(
                model=settings.audit_model,
                max_tokens=settings.audit_max_tokens,
                messages=[{
                    "role": "user",
                    "content": build_prompt(proposals, today)
                }]
            )
        except anthropic.APIError as e:
            logger.error("audit_api_error", error=str(e))
            raise ExternalServiceError(
                "anthropic",
                "Erro ao conectar com a inteligência artificial para auditoria.",
                details={"original_error": str(e)}
            ) from e

        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ).strip()

        logger.info("audit_completed", report_length=len(text))

        return text or EMPTY_REPLY_MESSAGE


# Singleton instance
_audit_service: Optional[AuditService] = None


def get_audit_service() -> AuditService:
    """Get or create AuditService instance."""
    global _audit_service
    if _audit_service is None:
        _audit_service = AuditService()
    return _audit_service
