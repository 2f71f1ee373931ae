"""
normalize.py

Turns raw worksheet rows into validated transactions.

Input contract
--------------
The first non-blank row of a worksheet is the header row. It must contain the four
configured header labels (period, category, transaction type, value) in any
column order. Every following row is one transaction:

- period: "DD.MM.YYYY" string (or a cell already holding a date)
- category: string
- transaction type: the income label or the outcome label
- value: numeric cell, the unsigned amount

Rows that fail to parse are skipped by read_transactions; a header row that
lacks a required label fails the whole worksheet.
"""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, List, Sequence, Tuple

import pandas as pd

from .config import ColumnHeaders, TypeLabels

DATE_FORMAT = "%d.%m.%Y"


class TxKind(Enum):
    INCOME = "income"
    OUTCOME = "outcome"


@dataclass(frozen=True)
class Transaction:
    date: date
    category: str
    kind: TxKind
    amount: float


@dataclass(frozen=True)
class ColumnRoles:
    period: int
    category: int
    tx_type: int
    value: int


class HeaderResolutionError(Exception):
    """Raised when a worksheet has no header row or lacks a required column."""

    def __init__(self, sheet: str, message: str):
        self.sheet = sheet
        super().__init__(message)


class FieldParseError(ValueError):
    """Raised when one cell of a row can't be read as the expected field."""

    def __init__(self, field: str, value: object):
        self.field = field
        self.value = value
        super().__init__(f"Can't read {field} from {value!r}")


def _is_missing(cell: object) -> bool:
    try:
        return bool(pd.isna(cell))
    except (TypeError, ValueError):
        return False


# ======================================================
# HEADER RESOLUTION
# ======================================================

def resolve_columns(header_row: Sequence[object], headers: ColumnHeaders, sheet: str) -> ColumnRoles:
    wanted = {
        "period": headers.period,
        "category": headers.category,
        "tx_type": headers.tx_type,
        "value": headers.value,
    }
    found = {}
    for i, cell in enumerate(header_row):
        if not isinstance(cell, str):
            continue
        label = cell.strip()
        for role, expected in wanted.items():
            if role not in found and label == expected:
                found[role] = i

    for role, expected in wanted.items():
        if role not in found:
            raise HeaderResolutionError(sheet, f"Can't find column '{expected}' in sheet '{sheet}'")

    return ColumnRoles(**found)


# ======================================================
# FIELD PARSERS
# ======================================================

def parse_date(cell: object) -> date:
    if _is_missing(cell):
        raise FieldParseError("period", cell)
    if isinstance(cell, datetime):
        return cell.date()
    if isinstance(cell, date):
        return cell
    if isinstance(cell, str):
        try:
            return datetime.strptime(cell.strip(), DATE_FORMAT).date()
        except ValueError:
            pass
    raise FieldParseError("period", cell)


def parse_category(cell: object) -> str:
    if not isinstance(cell, str):
        raise FieldParseError("category", cell)
    return cell


def parse_kind(cell: object, labels: TypeLabels) -> TxKind:
    if isinstance(cell, str):
        s = cell.strip()
        if s == labels.income:
            return TxKind.INCOME
        if s == labels.outcome:
            return TxKind.OUTCOME
    raise FieldParseError("transaction type", cell)


def parse_value(cell: object) -> float:
    if isinstance(cell, bool) or not isinstance(cell, numbers.Real):
        raise FieldParseError("value", cell)
    value = float(cell)
    if math.isnan(value):
        raise FieldParseError("value", cell)
    return value


def normalize_row(row: Sequence[object], columns: ColumnRoles, labels: TypeLabels) -> Transaction:
    return Transaction(
        date=parse_date(row[columns.period]),
        category=parse_category(row[columns.category]),
        kind=parse_kind(row[columns.tx_type], labels),
        amount=parse_value(row[columns.value]),
    )


# ======================================================
# WORKSHEET ROWS
# ======================================================

def _rows(frame: pd.DataFrame) -> Iterable[list]:
    for values in frame.itertuples(index=False, name=None):
        yield list(values)


def read_transactions(
    frame: pd.DataFrame,
    headers: ColumnHeaders,
    labels: TypeLabels,
    sheet: str,
) -> Tuple[List[Transaction], int]:
    """
    Parse a raw worksheet into transactions.

    Returns:
        (transactions, skipped_rows)

    Raises:
        HeaderResolutionError: sheet is blank or lacks a required header
    """
    rows = _rows(frame)
    # the table may start below a blank title area
    header_row = next((r for r in rows if not all(_is_missing(c) for c in r)), None)
    if header_row is None:
        raise HeaderResolutionError(sheet, f"Can't read first row from sheet '{sheet}'")

    columns = resolve_columns(header_row, headers, sheet)

    transactions: List[Transaction] = []
    skipped = 0
    for row in rows:
        if all(_is_missing(c) for c in row):
            continue
        try:
            transactions.append(normalize_row(row, columns, labels))
        except FieldParseError:
            skipped += 1
    return transactions, skipped
