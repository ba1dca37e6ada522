"""
Template service: generate the blank import spreadsheet.

The template has the full proposal sheet plus the "Informações de Evento"
sheet, which is the one the importer reads.
"""

from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
import structlog

from parsers.spreadsheet_reader import EVENT_TAB_COLUMNS

logger = structlog.get_logger(__name__)

TEMPLATE_FILENAME = "CAZARI_IMPORT_TEMPLATE.xlsx"

PROPOSALS_SHEET = "PROPOSTAS"
EVENT_SHEET = "Informações de Evento"

PROPOSAL_COLUMNS = [
    "Empresa",
    "Responsável",
    "E-mail",
    "Telefone",
    "Tipo Grupo",
    "Cidade / Praça",
    "Evento",
    "Tipo de Proposta",
    "Valor unitário por inscrição",
    "Valor Proposto",
    "Quant. Vagas",
    "Status",
    "Envio da Proposta",
    "Data de Retorno",
    "Último Contato",
    "Reserva",
    "Observações",
]


class TemplateService:
    """Service for generating the downloadable import template."""

    def generate_import_template(self) -> BytesIO:
        """
        Generate the blank import workbook.

        Returns:
            BytesIO containing the .xlsx file
        """
        logger.info(
            "generating_import_template",
            proposal_columns=len(PROPOSAL_COLUMNS),
            event_columns=len(EVENT_TAB_COLUMNS),
        )

        wb = Workbook()
        ws = wb.active
        ws.title = PROPOSALS_SHEET
        self._write_header(ws, PROPOSAL_COLUMNS)

        ws_event = wb.create_sheet(EVENT_SHEET)
        self._write_header(ws_event, EVENT_TAB_COLUMNS)

        output = BytesIO()
        wb.save(output)
        output.seek(0)
        return output

    def _write_header(self, ws, columns: list[str]) -> None:
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="1A1A1A", end_color="1A1A1A", fill_type="solid")

        for col_idx, label in enumerate(columns, start=1):
            cell = ws.cell(row=1, column=col_idx, value=label)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center")
            ws.column_dimensions[get_column_letter(col_idx)].width = max(14, len(label) + 4)

        ws.freeze_panes = "A2"


# Singleton
_template_service: Optional[TemplateService] = None


def get_template_service() -> TemplateService:
    """Get or create TemplateService instance."""
    global _template_service
    if _template_service is None:
        _template_service = TemplateService()
    return _template_service
