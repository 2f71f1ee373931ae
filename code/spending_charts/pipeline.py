"""
pipeline.py

Per-worksheet orchestration: raw rows -> ledger -> window -> series -> charts.

Failure policy
--------------
- Unparseable rows are dropped (counted in WorksheetReport.skipped_rows).
- A worksheet without the required headers fails on its own; every other
  worksheet is still processed.
- Worksheet failures are collected and surfaced together once all worksheets
  have been attempted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .classify import DEFAULT_VARIANTS, Variant
from .config import Settings
from .ledger import Ledger, build_ledger, period_universe
from .normalize import HeaderResolutionError, read_transactions
from .report import ChartRequest, assemble
from .series import materialize
from .window import select_window


class ReportError(Exception):
    """Raised when one or more worksheets could not be processed."""

    def __init__(self, errors: Sequence[Exception], requests: Sequence[ChartRequest] = ()):
        self.errors = list(errors)
        self.requests = list(requests)
        super().__init__(";\n".join(str(e) for e in self.errors))


@dataclass
class WorksheetReport:
    worksheet: str
    ledger: Ledger
    window: List[str]
    requests: List[ChartRequest]
    skipped_rows: int = 0


@dataclass
class RunResult:
    reports: List[WorksheetReport] = field(default_factory=list)
    errors: List[HeaderResolutionError] = field(default_factory=list)

    @property
    def requests(self) -> List[ChartRequest]:
        return [r for rep in self.reports for r in rep.requests]

    @property
    def ok(self) -> bool:
        return not self.errors


def load_ledger(name: str, frame: pd.DataFrame, settings: Settings) -> Tuple[Ledger, int]:
    transactions, skipped = read_transactions(frame, settings.headers, settings.labels, name)
    return build_ledger(transactions, settings.group_by), skipped


def _report(
    name: str,
    ledger: Ledger,
    window: List[str],
    skipped: int,
    variants: Sequence[Variant],
) -> WorksheetReport:
    series = materialize(ledger, window)
    return WorksheetReport(
        worksheet=name,
        ledger=ledger,
        window=window,
        requests=assemble(name, series, window, variants),
        skipped_rows=skipped,
    )


def process_worksheet(
    name: str,
    frame: pd.DataFrame,
    settings: Settings,
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
) -> WorksheetReport:
    """
    Run one worksheet end to end with its own trailing window.

    Raises:
        HeaderResolutionError: sheet is empty or lacks a required header
    """
    ledger, skipped = load_ledger(name, frame, settings)
    window = select_window(period_universe(ledger), settings.window_size)
    return _report(name, ledger, window, skipped, variants)


def build_reports(
    workbook: Dict[str, pd.DataFrame],
    settings: Settings,
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
) -> RunResult:
    """
    Process every worksheet, collecting worksheet failures instead of raising.

    With settings.shared_window the trailing window is derived from the periods
    of all successfully read worksheets, so every chart shares one x-axis.
    """
    result = RunResult()
    ledgers: Dict[str, Tuple[Ledger, int]] = {}

    for name, frame in workbook.items():
        try:
            ledgers[name] = load_ledger(name, frame, settings)
        except HeaderResolutionError as e:
            result.errors.append(e)

    shared: Optional[List[str]] = None
    if settings.shared_window:
        shared = select_window(
            period_universe(*(ledger for ledger, _ in ledgers.values())),
            settings.window_size,
        )

    for name, (ledger, skipped) in ledgers.items():
        window = shared if shared is not None else select_window(period_universe(ledger), settings.window_size)
        result.reports.append(_report(name, ledger, window, skipped, variants))

    return result


def generate_chart_requests(
    workbook: Dict[str, pd.DataFrame],
    settings: Settings,
    variants: Sequence[Variant] = DEFAULT_VARIANTS,
) -> List[ChartRequest]:
    """
    All chart requests for a workbook.

    Raises:
        ReportError: at least one worksheet failed; the message lists every
            failure and .requests still holds the charts of the good sheets
    """
    result = build_reports(workbook, settings, variants)
    if result.errors:
        raise ReportError(result.errors, result.requests)
    return result.requests
