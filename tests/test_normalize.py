#!/usr/bin/env python3
"""
test_normalize.py

Unit tests for header resolution and row normalization.

Tests:
- Header columns found in any order
- Missing header / empty sheet -> worksheet-scoped error
- Each field parser accepts valid cells and names the field on failure
- read_transactions skips malformed rows and counts them
"""

import unittest
import sys
from datetime import date, datetime
from pathlib import Path

import pandas as pd

# Add code directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "code"))

from spending_charts.config import ColumnHeaders, TypeLabels
from spending_charts.normalize import (
    ColumnRoles,
    FieldParseError,
    HeaderResolutionError,
    Transaction,
    TxKind,
    normalize_row,
    read_transactions,
    resolve_columns,
)

HEADERS = ColumnHeaders()
LABELS = TypeLabels()
HEADER_ROW = ["Период", "Счет", "Категория", "RUB", "Доход/Расход"]
COLUMNS = ColumnRoles(period=0, category=2, tx_type=4, value=3)


def _frame(rows):
    return pd.DataFrame(rows, dtype=object)


class TestResolveColumns(unittest.TestCase):

    def test_finds_columns_in_any_order(self):
        self.assertEqual(resolve_columns(HEADER_ROW, HEADERS, "Sheet1"), COLUMNS)

    def test_value_header_in_last_column(self):
        row = ["Период", "Категория", "Доход/Расход", "RUB"]
        cols = resolve_columns(row, HEADERS, "Sheet1")
        self.assertEqual(cols.value, 3)

    def test_missing_value_header(self):
        row = ["Период", "Категория", "Доход/Расход", "USD"]
        with self.assertRaises(HeaderResolutionError) as ctx:
            resolve_columns(row, HEADERS, "Cards")
        self.assertEqual(ctx.exception.sheet, "Cards")
        self.assertIn("RUB", str(ctx.exception))
        self.assertIn("Cards", str(ctx.exception))

    def test_ignores_non_string_cells(self):
        row = [float("nan"), 42, "Период", "Категория", "Доход/Расход", "RUB"]
        cols = resolve_columns(row, HEADERS, "Sheet1")
        self.assertEqual(cols, ColumnRoles(period=2, category=3, tx_type=4, value=5))

    def test_custom_headers(self):
        headers = ColumnHeaders(period="Date", category="Category", tx_type="Type", value="Amount")
        cols = resolve_columns(["Amount", "Type", "Category", "Date"], headers, "S")
        self.assertEqual(cols, ColumnRoles(period=3, category=2, tx_type=1, value=0))


class TestNormalizeRow(unittest.TestCase):

    def test_valid_outcome(self):
        row = ["01.02.2023", "Card", "Food", 300.0, "Расход"]
        tx = normalize_row(row, COLUMNS, LABELS)
        self.assertEqual(tx, Transaction(date(2023, 2, 1), "Food", TxKind.OUTCOME, 300.0))

    def test_valid_income_int_value(self):
        row = ["15.01.2023", "Card", "Salary", 1000, "Доход"]
        tx = normalize_row(row, COLUMNS, LABELS)
        self.assertIs(tx.kind, TxKind.INCOME)
        self.assertEqual(tx.amount, 1000.0)
        self.assertIsInstance(tx.amount, float)

    def test_date_cell_accepted(self):
        row = [datetime(2023, 3, 4, 0, 0), "Card", "Food", 1.0, "Расход"]
        self.assertEqual(normalize_row(row, COLUMNS, LABELS).date, date(2023, 3, 4))

    def test_bad_date(self):
        for cell in ["2023-01-01", "32.01.2023", "", float("nan"), 44927]:
            row = [cell, "Card", "Food", 1.0, "Расход"]
            with self.assertRaises(FieldParseError) as ctx:
                normalize_row(row, COLUMNS, LABELS)
            self.assertEqual(ctx.exception.field, "period")

    def test_bad_category(self):
        row = ["01.01.2023", "Card", float("nan"), 1.0, "Расход"]
        with self.assertRaises(FieldParseError) as ctx:
            normalize_row(row, COLUMNS, LABELS)
        self.assertEqual(ctx.exception.field, "category")

    def test_bad_tx_type(self):
        for cell in ["Перевод", float("nan"), 1]:
            row = ["01.01.2023", "Card", "Food", 1.0, cell]
            with self.assertRaises(FieldParseError) as ctx:
                normalize_row(row, COLUMNS, LABELS)
            self.assertEqual(ctx.exception.field, "transaction type")

    def test_bad_value(self):
        for cell in ["300", float("nan"), True, None]:
            row = ["01.01.2023", "Card", "Food", cell, "Расход"]
            with self.assertRaises(FieldParseError) as ctx:
                normalize_row(row, COLUMNS, LABELS)
            self.assertEqual(ctx.exception.field, "value")

    def test_error_message_names_field(self):
        row = ["garbage", "Card", "Food", 1.0, "Расход"]
        with self.assertRaises(FieldParseError) as ctx:
            normalize_row(row, COLUMNS, LABELS)
        self.assertIn("period", str(ctx.exception))
        self.assertIn("garbage", str(ctx.exception))


class TestReadTransactions(unittest.TestCase):

    def test_skips_malformed_rows(self):
        frame = _frame([
            HEADER_ROW,
            ["01.01.2023", "Card", "Food", 300.0, "Расход"],
            ["not a date", "Card", "Food", 999.0, "Расход"],
            ["15.01.2023", "Card", "Food", 100.0, "Расход"],
        ])
        txs, skipped = read_transactions(frame, HEADERS, LABELS, "Sheet1")
        self.assertEqual(len(txs), 2)
        self.assertEqual(skipped, 1)
        self.assertEqual(sum(t.amount for t in txs), 400.0)

    def test_blank_rows_not_counted(self):
        nan = float("nan")
        frame = _frame([
            HEADER_ROW,
            ["01.01.2023", "Card", "Food", 300.0, "Расход"],
            [nan, nan, nan, nan, nan],
        ])
        txs, skipped = read_transactions(frame, HEADERS, LABELS, "Sheet1")
        self.assertEqual(len(txs), 1)
        self.assertEqual(skipped, 0)

    def test_empty_sheet(self):
        with self.assertRaises(HeaderResolutionError) as ctx:
            read_transactions(pd.DataFrame(), HEADERS, LABELS, "Empty")
        self.assertIn("first row", str(ctx.exception))

    def test_header_below_blank_rows(self):
        nan = float("nan")
        frame = _frame([
            [nan, nan, nan, nan, nan, nan],
            [nan, nan, nan, nan, nan, nan],
            [nan] + HEADER_ROW,
            [nan, "01.01.2023", "Card", "Food", 300.0, "Расход"],
            [nan, "15.01.2023", "Card", "Food", 100.0, "Расход"],
        ])
        txs, skipped = read_transactions(frame, HEADERS, LABELS, "Sheet1")
        self.assertEqual(skipped, 0)
        self.assertEqual([t.amount for t in txs], [300.0, 100.0])
        self.assertEqual(txs[0].date, date(2023, 1, 1))

    def test_blank_sheet(self):
        nan = float("nan")
        with self.assertRaises(HeaderResolutionError) as ctx:
            read_transactions(_frame([[nan, nan], [nan, nan]]), HEADERS, LABELS, "Blank")
        self.assertIn("first row", str(ctx.exception))

    def test_header_only(self):
        txs, skipped = read_transactions(_frame([HEADER_ROW]), HEADERS, LABELS, "Sheet1")
        self.assertEqual(txs, [])
        self.assertEqual(skipped, 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
