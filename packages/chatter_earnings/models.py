"""Value types produced by the parser and the aggregator.

All records are frozen dataclasses: every parse or aggregation call builds
fresh values from the raw ledger text, so there is no mutable state to go
stale between calls. The one sanctioned edit, a manual category override,
returns a copy (see :meth:`Transaction.with_category`).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from decimal import Decimal

from .currency import ZERO


@dataclass(frozen=True, slots=True)
class Transaction:
    """A single parsed ledger line.

    Attributes
    ----------
    date, time:
        Exactly as captured from the input (e.g. ``"Oct 8, 2025"`` and
        ``"11:54 am"``); never reformatted.
    gross, fee, net:
        Non-negative amounts. ``fee`` is either the fee column or
        ``max(0, gross - net)`` when the line has no fee column.
    description:
        Free text, including any wrapped continuation lines.
    category:
        An automatic category label, or a manual label after an override.
    hour:
        Hour of day (0-23) in the business timezone.
    """

    date: str
    time: str
    gross: Decimal
    fee: Decimal
    net: Decimal
    description: str
    category: str
    hour: int

    def with_category(self, category: str) -> Transaction:
        # Amounts and hour are left untouched.
        return replace(self, category=category)

    def with_description(self, description: str) -> Transaction:
        return replace(self, description=description)


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Output of a batch parse.

    ``skipped_lines`` holds the raw lines that looked like data (contained a
    digit) but matched no ledger layout, for the user to fix and re-paste.
    """

    transactions: tuple[Transaction, ...]
    skipped_lines: tuple[str, ...]
    currency: str


@dataclass(frozen=True, slots=True)
class CategoryTotals:
    gross: Decimal = ZERO
    net: Decimal = ZERO
    count: int = 0
    # Only populated on the chatter-sales view.
    whole_number_count: int | None = None
    tip_count: int | None = None


@dataclass(frozen=True, slots=True)
class HourlyTotal:
    hour: int
    total: Decimal


@dataclass(frozen=True, slots=True)
class EarningsStats:
    """Full aggregation result for one batch of transactions."""

    chatter_sales: CategoryTotals
    tips: CategoryTotals
    ppv_sales: CategoryTotals
    bundle_sales: CategoryTotals
    subscriptions: CategoryTotals
    welcome_messages: CategoryTotals
    overall: CategoryTotals
    hourly_breakdown: tuple[HourlyTotal, ...]


@dataclass(frozen=True, slots=True)
class SessionSummary:
    ppv_count: int
    welcome_count: int
    subscription_count: int
    total_gross: Decimal
    total_net: Decimal
    total_transactions: int


@dataclass(frozen=True, slots=True)
class HourlySplit:
    """Net revenue per hour, split into subscriptions and everything else."""

    sales: tuple[HourlyTotal, ...]
    subscriptions: tuple[HourlyTotal, ...]
    total_sales: Decimal
    total_subscriptions: Decimal
    peak_sales_hour: int | None
    peak_subscriptions_hour: int | None


@dataclass(frozen=True, slots=True)
class LedgerReport:
    """Everything derived from one pasted ledger."""

    parsed: ParseResult
    stats: EarningsStats
    summary: SessionSummary
    hourly: HourlySplit


__all__ = [
    "CategoryTotals",
    "EarningsStats",
    "HourlySplit",
    "HourlyTotal",
    "LedgerReport",
    "ParseResult",
    "SessionSummary",
    "Transaction",
]
