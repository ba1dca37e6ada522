"""
Unit tests for the spreadsheet reader.

Workbooks are built in memory with pandas/openpyxl.
"""

from io import BytesIO

import pytest
from openpyxl import Workbook

from parsers.cells import EmptyCell, NumberCell, TextCell
from parsers.spreadsheet_reader import (
    COL_EVENT,
    COL_OBSERVATIONS,
    COL_SLOTS,
    COL_TOTAL_VALUE,
    COL_UNIT_VALUE,
    EVENT_TAB_COLUMNS,
    build_column_map,
    read_spreadsheet,
    select_sheet_name,
)
from exceptions import SpreadsheetParseError

from tests.factories import build_event_workbook


# ===================
# COLUMN MAP
# ===================

class TestBuildColumnMap:
    """Tests for build_column_map()"""

    def test_maps_every_canonical_column(self):
        column_map = build_column_map(EVENT_TAB_COLUMNS)

        assert column_map.missing == []
        assert column_map.index_of(COL_EVENT) == 0
        assert column_map.index_of(COL_OBSERVATIONS) == 6

    def test_match_is_case_insensitive_substring(self):
        headers = ["Nome do EVENTO", "quant. vagas (total)", "Valor por Inscrição R$"]

        column_map = build_column_map(headers)

        assert column_map.index_of(COL_EVENT) == 0
        assert column_map.index_of(COL_SLOTS) == 1
        assert column_map.index_of(COL_UNIT_VALUE) == 2

    def test_first_matching_header_wins(self):
        column_map = build_column_map(["Evento", "Evento (cópia)"])

        assert column_map.index_of(COL_EVENT) == 0

    def test_missing_columns_are_reported_not_raised(self):
        column_map = build_column_map(["Evento"])

        assert column_map.index_of(COL_TOTAL_VALUE) is None
        assert COL_TOTAL_VALUE in column_map.missing


class TestSelectSheetName:

    def test_prefers_event_sheet(self):
        assert select_sheet_name(["PROPOSTAS", "Informações de Evento"]) == "Informações de Evento"

    def test_falls_back_to_first_sheet(self):
        assert select_sheet_name(["Planilha1", "Planilha2"]) == "Planilha1"


# ===================
# READING
# ===================

class TestReadSpreadsheet:
    """Tests for read_spreadsheet()"""

    def test_reads_event_sheet_rows_with_row_numbers(self):
        content = build_event_workbook(
            rows=[
                ["Corrida SP", "São Paulo", "SP", 50, 10, 500, "obs"],
                ["Maratona Rio", "Rio", "RJ", "R$ 80,00", 2, None, None],
            ],
            leading_sheets={"PROPOSTAS": [["Empresa"], ["ACME"]]},
        )

        sheet = read_spreadsheet(content)

        assert sheet.sheet_name == "Informações de Evento"
        assert sheet.headers == EVENT_TAB_COLUMNS
        assert [r.row_number for r in sheet.rows] == [2, 3]

        first, second = sheet.rows
        assert sheet.column_map.get(first, COL_EVENT) == TextCell("Corrida SP")
        assert sheet.column_map.get(first, COL_SLOTS) == NumberCell(10)
        assert sheet.column_map.get(second, COL_UNIT_VALUE) == TextCell("R$ 80,00")
        assert isinstance(sheet.column_map.get(second, COL_TOTAL_VALUE), EmptyCell)

    def test_column_order_does_not_matter(self):
        columns = list(reversed(EVENT_TAB_COLUMNS))
        content = build_event_workbook(
            rows=[["obs", 500, 10, 50, "SP", "São Paulo", "Corrida SP"]],
            columns=columns,
        )

        sheet = read_spreadsheet(content)
        row = sheet.rows[0]

        assert sheet.column_map.get(row, COL_EVENT) == TextCell("Corrida SP")
        assert sheet.column_map.get(row, COL_UNIT_VALUE) == NumberCell(50)

    def test_accepts_file_like_object(self):
        content = build_event_workbook(rows=[["Corrida", "SP", "SP", 50, 1, 50, None]])

        sheet = read_spreadsheet(BytesIO(content))

        assert len(sheet.rows) == 1

    def test_header_only_sheet_has_no_rows(self):
        content = build_event_workbook(rows=[])

        sheet = read_spreadsheet(content)

        assert sheet.rows == []

    def test_empty_sheet_raises(self):
        wb = Workbook()
        wb.active.title = "Informações de Evento"
        output = BytesIO()
        wb.save(output)

        with pytest.raises(SpreadsheetParseError) as exc_info:
            read_spreadsheet(output.getvalue())

        assert exc_info.value.message == "A planilha está vazia."

    def test_not_a_spreadsheet_raises(self):
        with pytest.raises(SpreadsheetParseError) as exc_info:
            read_spreadsheet(b"this is not an xlsx file")

        assert exc_info.value.code == "SPREADSHEET_PARSE_ERROR"
        assert exc_info.value.status_code == 422
