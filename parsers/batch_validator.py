"""
Batch validator for the event-info import.

Runs the row classifier over every data row in sheet order and folds the
per-row results into one result plus the import summary.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Iterable, Optional
import structlog

from models.proposal import Proposal
from parsers.proposal_synthesizer import ImportContext
from parsers.row_classifier import (
    CorrectionLog,
    FieldValidationError,
    RowClassificationResult,
    classify_row,
)
from parsers.spreadsheet_reader import ColumnMap, ParsedSheet, RawRow

logger = structlog.get_logger(__name__)


class ImportStatus(str, Enum):
    SUCCESS = "success"
    PARTIAL = "partial"
    ERROR = "error"


@dataclass
class ImportSummary:
    """
    Aggregate counts shown before and after committing.

    Created as PARTIAL after analysis, moved to SUCCESS after commit.
    """
    total_analyzed: int
    new_proposals: int
    updated_proposals: int
    total_items: int
    corrections_count: int
    errors_count: int
    status: ImportStatus = ImportStatus.PARTIAL
    message: str = ""

    def mark(self, status: ImportStatus, message: str) -> "ImportSummary":
        return replace(self, status=status, message=message)


@dataclass
class BatchValidationResult:
    """Errors, corrections and candidates in sheet row order."""
    errors: list[FieldValidationError] = field(default_factory=list)
    corrections: list[CorrectionLog] = field(default_factory=list)
    candidates: list[Proposal] = field(default_factory=list)
    skipped_rows: int = 0
    rejected_rows: int = 0
    summary: Optional[ImportSummary] = None

    def add(self, result: RowClassificationResult) -> "BatchValidationResult":
        """Fold one row result in; rows must arrive in sheet order."""
        self.errors.extend(result.errors)
        self.corrections.extend(result.corrections)
        if result.candidate is not None:
            self.candidates.append(result.candidate)
        if result.skipped:
            self.skipped_rows += 1
        elif result.errors:
            self.rejected_rows += 1
        return self


def accumulate(results: Iterable[RowClassificationResult]) -> BatchValidationResult:
    """Combine per-row results, preserving their order."""
    batch = BatchValidationResult()
    for result in results:
        batch.add(result)
    return batch


def build_summary(batch: BatchValidationResult, total_analyzed: int, sheet_name: str) -> ImportSummary:
    """
    Summary after analysis.

    Every accepted row becomes a new proposal; rows are never matched
    against existing records, so updated_proposals is always 0.
    """
    return ImportSummary(
        total_analyzed=total_analyzed,
        new_proposals=len(batch.candidates),
        updated_proposals=0,
        total_items=len(batch.candidates),
        corrections_count=len(batch.corrections),
        errors_count=len(batch.errors),
        status=ImportStatus.PARTIAL,
        message=f'Análise da aba "{sheet_name}" concluída.',
    )


def validate_rows(
    rows: list[RawRow],
    column_map: ColumnMap,
    context: ImportContext,
    sheet_name: str = "",
) -> BatchValidationResult:
    """
    Classify every row and build the summary.

    Pure function of (rows, column_map, context): running it twice on the
    same input yields equal errors, corrections and candidates.
    """
    batch = accumulate(
        classify_row(row, column_map, context, sheet_row_count=len(rows))
        for row in rows
    )
    batch.summary = build_summary(batch, total_analyzed=len(rows), sheet_name=sheet_name)

    logger.info(
        "rows_validated",
        sheet=sheet_name,
        total=len(rows),
        candidates=len(batch.candidates),
        errors=len(batch.errors),
        corrections=len(batch.corrections),
        skipped=batch.skipped_rows,
    )

    return batch


def validate_sheet(sheet: ParsedSheet, context: ImportContext) -> BatchValidationResult:
    """Validate a sheet returned by the spreadsheet reader."""
    return validate_rows(sheet.rows, sheet.column_map, context, sheet_name=sheet.sheet_name)
