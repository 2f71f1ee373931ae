"""
Spending charts: per-category spending time series from transaction workbooks.
"""

from .classify import Variant, is_regular, is_spending
from .config import Settings, build_settings
from .io import SourceOpenError, load_settings, open_workbook
from .ledger import build_ledger, period_universe
from .normalize import FieldParseError, HeaderResolutionError, Transaction, TxKind
from .periods import Granularity, derive
from .pipeline import ReportError, build_reports, generate_chart_requests, process_worksheet
from .report import ChartRequest, ChartSeries, LineStyle
from .series import Series, materialize
from .window import select_window

__all__ = [
    "Variant",
    "is_regular",
    "is_spending",
    "Settings",
    "build_settings",
    "SourceOpenError",
    "load_settings",
    "open_workbook",
    "build_ledger",
    "period_universe",
    "FieldParseError",
    "HeaderResolutionError",
    "Transaction",
    "TxKind",
    "Granularity",
    "derive",
    "ReportError",
    "build_reports",
    "generate_chart_requests",
    "process_worksheet",
    "ChartRequest",
    "ChartSeries",
    "LineStyle",
    "Series",
    "materialize",
    "select_window",
]
