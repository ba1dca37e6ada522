"""
Row classifier for the event-info import.

Turns one spreadsheet row into errors, corrections and (when the row is
usable) a candidate proposal. Each field is judged independently; the
row is importable only when none of its fields produced an error.
Classification never raises past its own row.
"""

from dataclasses import dataclass, field
from math import floor, isfinite, isnan
from typing import Any, Optional

from models.proposal import Proposal
from parsers.cells import CellValue, NumberCell, cell_number, cell_text
from parsers.proposal_synthesizer import ImportContext, synthesize_proposal
from parsers.spreadsheet_reader import (
    COL_CITY,
    COL_EVENT,
    COL_OBSERVATIONS,
    COL_PRACA_CODE,
    COL_SLOTS,
    COL_TOTAL_VALUE,
    COL_UNIT_VALUE,
    ColumnMap,
    RawRow,
)
from utils.number_utils import is_positive_number, round_money

# User-facing reasons, shown in the import preview
ERROR_INVALID_SLOTS = "Quantidade de vagas inválida"
ERROR_INVALID_UNIT_VALUE = "Valor por inscrição inválido"
ERROR_INVALID_TOTAL = "Valor total inválido"
REASON_SLOTS_ROUNDED = "Conversão para inteiro/Arredondamento para baixo"
REASON_CURRENCY_FORMAT = "Normalização de formato monetário"
REASON_TOTAL_RECALCULATED = "Recálculo automático (Vagas x Unitário)"


@dataclass(frozen=True)
class FieldValidationError:
    """A value that could not be coerced; blocks its row."""
    row: int
    column: str
    reason: str


@dataclass(frozen=True)
class CorrectionLog:
    """A value that was coerced to its canonical form; never blocks."""
    row: int
    column: str
    original: Any
    corrected: Any
    reason: str


@dataclass(frozen=True)
class RowClassificationResult:
    """Outcome of classifying one row."""
    row: int
    errors: tuple[FieldValidationError, ...] = ()
    corrections: tuple[CorrectionLog, ...] = ()
    candidate: Optional[Proposal] = None
    skipped: bool = False

    @property
    def importable(self) -> bool:
        return self.candidate is not None


@dataclass
class _FieldCheck:
    ok: bool
    value: Any = None
    errors: list[FieldValidationError] = field(default_factory=list)
    corrections: list[CorrectionLog] = field(default_factory=list)


def _check_slots(cell: CellValue, row: int) -> _FieldCheck:
    number = cell_number(cell)
    if not is_positive_number(number):
        return _FieldCheck(
            ok=False,
            errors=[FieldValidationError(row=row, column=COL_SLOTS, reason=ERROR_INVALID_SLOTS)],
        )

    # Slots are sold whole: round down instead of rejecting "3.0" or 2.5
    slots = int(floor(number))
    check = _FieldCheck(ok=True, value=slots)

    if not (isinstance(cell, NumberCell) and cell.value == slots):
        check.corrections.append(CorrectionLog(
            row=row,
            column=COL_SLOTS,
            original=cell.original,
            corrected=slots,
            reason=REASON_SLOTS_ROUNDED,
        ))
    return check


def _check_unit_value(cell: CellValue, row: int) -> _FieldCheck:
    number = cell_number(cell)
    if not is_positive_number(number):
        return _FieldCheck(
            ok=False,
            errors=[FieldValidationError(row=row, column=COL_UNIT_VALUE, reason=ERROR_INVALID_UNIT_VALUE)],
        )

    unit_value = float(number)
    check = _FieldCheck(ok=True, value=unit_value)

    if not (isinstance(cell, NumberCell) and cell.value == unit_value):
        check.corrections.append(CorrectionLog(
            row=row,
            column=COL_UNIT_VALUE,
            original=cell.original,
            corrected=unit_value,
            reason=REASON_CURRENCY_FORMAT,
        ))
    return check


def _check_total(cell: CellValue, row: int, slots: int, unit_value: float) -> _FieldCheck:
    """The calculated total always wins over the typed one."""
    calculated = round_money(slots * unit_value)
    if not isfinite(calculated):
        return _FieldCheck(
            ok=False,
            errors=[FieldValidationError(row=row, column=COL_TOTAL_VALUE, reason=ERROR_INVALID_TOTAL)],
        )

    check = _FieldCheck(ok=True, value=calculated)

    stated = cell_number(cell)
    if isnan(stated) or round_money(stated) != calculated:
        check.corrections.append(CorrectionLog(
            row=row,
            column=COL_TOTAL_VALUE,
            original=cell.original,
            corrected=calculated,
            reason=REASON_TOTAL_RECALCULATED,
        ))
    return check


def classify_row(
    row: RawRow,
    column_map: ColumnMap,
    context: ImportContext,
    sheet_row_count: int,
) -> RowClassificationResult:
    """
    Classify one data row.

    Args:
        row: Typed cells and sheet row number
        column_map: Canonical label -> column index
        context: Acting user and import time for the candidate
        sheet_row_count: Number of data rows in the sheet

    Returns:
        RowClassificationResult; skipped=True for trailing blank rows
    """
    row_num = row.row_number
    event_name = cell_text(column_map.get(row, COL_EVENT)).strip()

    # Exports often end with blank rows; a lone row is still validated
    if not event_name and sheet_row_count > 1:
        return RowClassificationResult(row=row_num, skipped=True)

    errors: list[FieldValidationError] = []
    corrections: list[CorrectionLog] = []

    slots_check = _check_slots(column_map.get(row, COL_SLOTS), row_num)
    unit_check = _check_unit_value(column_map.get(row, COL_UNIT_VALUE), row_num)

    for check in (slots_check, unit_check):
        errors.extend(check.errors)
        corrections.extend(check.corrections)

    if not (slots_check.ok and unit_check.ok):
        return RowClassificationResult(
            row=row_num,
            errors=tuple(errors),
            corrections=tuple(corrections),
        )

    total_check = _check_total(
        column_map.get(row, COL_TOTAL_VALUE),
        row_num,
        slots_check.value,
        unit_check.value,
    )
    errors.extend(total_check.errors)
    corrections.extend(total_check.corrections)

    if not total_check.ok:
        return RowClassificationResult(
            row=row_num,
            errors=tuple(errors),
            corrections=tuple(corrections),
        )

    candidate = None
    if event_name:
        praca_code = cell_text(column_map.get(row, COL_PRACA_CODE))
        candidate = synthesize_proposal(
            context=context,
            position=row_num - 2,
            event=event_name,
            city=cell_text(column_map.get(row, COL_CITY)),
            praca_code=praca_code,
            observation=cell_text(column_map.get(row, COL_OBSERVATIONS)),
            slots=slots_check.value,
            unit_value=unit_check.value,
            total_value=total_check.value,
        )

    return RowClassificationResult(
        row=row_num,
        errors=tuple(errors),
        corrections=tuple(corrections),
        candidate=candidate,
    )
