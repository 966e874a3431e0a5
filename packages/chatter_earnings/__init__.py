"""Public interface for the ``chatter_earnings`` package.

This module exposes the package's API functions and public models/types as the
stable import surface. There is no runtime logic here, only symbol re-exports.
"""

from .aggregate import aggregate, hourly_split, summarize_session
from .api import analyze_ledger, apply_overrides, recompute, report_to_dict
from .categories import (
    AUTOMATIC_CATEGORIES,
    MANUAL_CATEGORIES,
    MANUAL_CATEGORY_OPTIONS,
    CategoryOption,
    override_category,
)
from .categorize import CATEGORY_RULES, categorize
from .config import DEFAULT_SETTINGS, Settings, load_settings
from .currency import detect_currency, parse_currency
from .daily_sales import DailySales, ModelTransactionRow, build_daily_sales
from .export import export_csv, import_csv
from .hours import resolve_hour
from .models import (
    CategoryTotals,
    EarningsStats,
    HourlySplit,
    HourlyTotal,
    LedgerReport,
    ParseResult,
    SessionSummary,
    Transaction,
)
from .parser import parse_line, parse_transactions

__all__ = [
    # API
    "aggregate",
    "analyze_ledger",
    "apply_overrides",
    "build_daily_sales",
    "categorize",
    "detect_currency",
    "export_csv",
    "hourly_split",
    "import_csv",
    "load_settings",
    "override_category",
    "parse_currency",
    "parse_line",
    "parse_transactions",
    "recompute",
    "report_to_dict",
    "resolve_hour",
    "summarize_session",
    # Constants
    "AUTOMATIC_CATEGORIES",
    "CATEGORY_RULES",
    "DEFAULT_SETTINGS",
    "MANUAL_CATEGORIES",
    "MANUAL_CATEGORY_OPTIONS",
    # Models / types
    "CategoryOption",
    "CategoryTotals",
    "DailySales",
    "EarningsStats",
    "HourlySplit",
    "HourlyTotal",
    "LedgerReport",
    "ModelTransactionRow",
    "ParseResult",
    "SessionSummary",
    "Settings",
    "Transaction",
]
