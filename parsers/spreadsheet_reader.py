"""
Spreadsheet reader for the event-info import.

Opens the uploaded workbook, picks the event sheet, and turns it into
header text plus typed rows. Only structural problems (unreadable file,
no sheets, empty sheet) raise here; everything about individual values
is left to the row classifier.
"""

from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path
from typing import Optional, Union
import structlog

import pandas as pd

from exceptions import SpreadsheetParseError
from parsers.cells import CellValue, EMPTY, cell_text, to_cell

logger = structlog.get_logger(__name__)


# ===================
# COLUMN LABELS
# ===================

COL_EVENT = "Evento"
COL_CITY = "Cidade / Praça"
COL_PRACA_CODE = "Sigla da Praça"
COL_UNIT_VALUE = "Valor por inscrição"
COL_SLOTS = "Quant. Vagas"
COL_TOTAL_VALUE = "Valor Total"
COL_OBSERVATIONS = "Observações"

EVENT_TAB_COLUMNS = [
    COL_EVENT,
    COL_CITY,
    COL_PRACA_CODE,
    COL_UNIT_VALUE,
    COL_SLOTS,
    COL_TOTAL_VALUE,
    COL_OBSERVATIONS,
]

EVENT_SHEET_HINT = "evento"

SpreadsheetSource = Union[str, Path, BytesIO, bytes]


@dataclass(frozen=True)
class RawRow:
    """One data row, with its 1-based position in the sheet."""
    row_number: int
    cells: tuple[CellValue, ...]

    def cell(self, index: Optional[int]) -> CellValue:
        if index is None or index >= len(self.cells):
            return EMPTY
        return self.cells[index]


@dataclass(frozen=True)
class ColumnMap:
    """
    Canonical column label -> column index.

    Labels not found in the header simply resolve to empty cells,
    they never fail the import.
    """
    indexes: dict[str, int] = field(default_factory=dict)

    def index_of(self, label: str) -> Optional[int]:
        return self.indexes.get(label)

    def get(self, row: RawRow, label: str) -> CellValue:
        return row.cell(self.indexes.get(label))

    @property
    def missing(self) -> list[str]:
        return [label for label in EVENT_TAB_COLUMNS if label not in self.indexes]


@dataclass
class ParsedSheet:
    """Result of reading the event sheet."""
    sheet_name: str
    headers: list[str]
    rows: list[RawRow]
    column_map: ColumnMap


def build_column_map(
    headers: list[str],
    labels: list[str] = EVENT_TAB_COLUMNS,
) -> ColumnMap:
    """
    Match each label against the header text.

    A header matches when it contains the label, ignoring case.
    The first matching header wins, so column order is irrelevant.
    """
    lowered = [str(h or "").strip().lower() for h in headers]
    indexes: dict[str, int] = {}

    for label in labels:
        needle = label.lower()
        for idx, header in enumerate(lowered):
            if needle in header:
                indexes[label] = idx
                break

    return ColumnMap(indexes=indexes)


def select_sheet_name(sheet_names: list[str]) -> str:
    """Prefer the sheet whose name mentions "evento", else the first one."""
    for name in sheet_names:
        if EVENT_SHEET_HINT in str(name).lower():
            return name
    return sheet_names[0]


def read_spreadsheet(file: SpreadsheetSource) -> ParsedSheet:
    """
    Read the event sheet of an uploaded workbook.

    Args:
        file: File path, file-like object or raw bytes of an .xlsx file

    Returns:
        ParsedSheet with headers (row 1), data rows (row 2 on) and column map

    Raises:
        SpreadsheetParseError: If the file cannot be read, has no sheets,
            or the chosen sheet is empty
    """
    if isinstance(file, (bytes, bytearray)):
        file = BytesIO(file)

    logger.info("reading_spreadsheet", file_type=type(file).__name__)

    try:
        excel = pd.ExcelFile(file, engine="openpyxl")
    except Exception as e:
        logger.error("spreadsheet_read_failed", error=str(e))
        raise SpreadsheetParseError(
            message="Não foi possível ler a planilha.",
            details={"original_error": str(e)}
        )

    with excel:
        if not excel.sheet_names:
            raise SpreadsheetParseError(message="A planilha não possui abas.")

        sheet_name = select_sheet_name(excel.sheet_names)

        try:
            df = excel.parse(sheet_name, header=None, dtype=object)
        except Exception as e:
            logger.error("sheet_read_failed", sheet=sheet_name, error=str(e))
            raise SpreadsheetParseError(
                message=f'Não foi possível ler a aba "{sheet_name}".',
                details={"sheet": sheet_name, "original_error": str(e)}
            )

    if df.empty:
        raise SpreadsheetParseError(
            message="A planilha está vazia.",
            details={"sheet": sheet_name}
        )

    records = list(df.itertuples(index=False, name=None))
    headers = [cell_text(to_cell(value)).strip() for value in records[0]]

    rows = [
        RawRow(
            row_number=position + 2,  # header is row 1
            cells=tuple(to_cell(value) for value in values),
        )
        for position, values in enumerate(records[1:])
    ]

    column_map = build_column_map(headers)

    logger.info(
        "spreadsheet_read",
        sheet=sheet_name,
        row_count=len(rows),
        mapped_columns=len(column_map.indexes),
        missing_columns=column_map.missing,
    )

    return ParsedSheet(
        sheet_name=sheet_name,
        headers=headers,
        rows=rows,
        column_map=column_map,
    )
