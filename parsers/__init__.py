"""
Spreadsheet parsers for the event-info import.

Reader -> row classifier -> batch validator; the proposal synthesizer
builds the records for accepted rows.
"""

from parsers.spreadsheet_reader import (
    read_spreadsheet,
    build_column_map,
    ParsedSheet,
    EVENT_TAB_COLUMNS,
)
from parsers.batch_validator import (
    validate_rows,
    validate_sheet,
    BatchValidationResult,
    ImportSummary,
    ImportStatus,
)
from parsers.proposal_synthesizer import ImportContext

__all__ = [
    "read_spreadsheet",
    "build_column_map",
    "ParsedSheet",
    "EVENT_TAB_COLUMNS",
    "validate_rows",
    "validate_sheet",
    "BatchValidationResult",
    "ImportSummary",
    "ImportStatus",
    "ImportContext",
]
