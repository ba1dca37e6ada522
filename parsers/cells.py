"""
Typed spreadsheet cells.

Each raw value read from a sheet is converted once into one of four cell
kinds, so the row classifier handles every case explicitly instead of
sniffing Python types on every access.
"""

from dataclasses import dataclass
from datetime import date, datetime, time
from numbers import Integral, Real
from typing import Any, Union
import math

import pandas as pd

from utils.number_utils import normalize_numeric


@dataclass(frozen=True)
class EmptyCell:
    """Missing value: no cell, None, NaN or whitespace-only text."""
    raw: Any = None

    @property
    def original(self) -> Any:
        return ""


@dataclass(frozen=True)
class NumberCell:
    """Numeric cell as stored by the spreadsheet tool."""
    value: Union[int, float]

    @property
    def original(self) -> Any:
        return self.value


@dataclass(frozen=True)
class TextCell:
    """Text cell, may still hold a number such as "R$ 50,00"."""
    value: str

    @property
    def original(self) -> Any:
        return self.value


@dataclass(frozen=True)
class DateCell:
    """Date or datetime cell."""
    value: datetime

    @property
    def original(self) -> Any:
        return self.value.isoformat()


CellValue = Union[EmptyCell, NumberCell, TextCell, DateCell]

EMPTY = EmptyCell()


def to_cell(value: Any) -> CellValue:
    """Convert a raw value from pandas/openpyxl into a typed cell."""
    if value is None:
        return EMPTY

    if isinstance(value, str):
        if not value.strip():
            return EmptyCell(raw=value)
        return TextCell(value)

    # Timestamp subclasses datetime; NaT must be caught before it
    if value is pd.NaT:
        return EMPTY
    if isinstance(value, datetime):
        return DateCell(pd.Timestamp(value).to_pydatetime())
    if isinstance(value, date):
        return DateCell(datetime.combine(value, time()))

    if isinstance(value, bool):
        return TextCell(str(value))

    if isinstance(value, Real):
        if isinstance(value, float) and math.isnan(value):
            return EMPTY
        # numpy scalars become plain Python numbers
        if isinstance(value, Integral):
            return NumberCell(int(value))
        return NumberCell(float(value))

    return TextCell(str(value))


def cell_text(cell: CellValue) -> str:
    """Text as it should appear in a stored record."""
    if isinstance(cell, EmptyCell):
        return ""
    if isinstance(cell, TextCell):
        return cell.value
    if isinstance(cell, NumberCell):
        if isinstance(cell.value, float) and cell.value.is_integer():
            return str(int(cell.value))
        return str(cell.value)
    if isinstance(cell, DateCell):
        return cell.value.date().isoformat()
    raise TypeError(f"Unknown cell type: {type(cell).__name__}")


def cell_number(cell: CellValue) -> float:
    """Numeric value of a cell, NaN when it is missing or not a number."""
    if isinstance(cell, EmptyCell):
        return math.nan
    if isinstance(cell, NumberCell):
        return normalize_numeric(cell.value)
    if isinstance(cell, TextCell):
        return normalize_numeric(cell.value)
    if isinstance(cell, DateCell):
        return math.nan
    raise TypeError(f"Unknown cell type: {type(cell).__name__}")
