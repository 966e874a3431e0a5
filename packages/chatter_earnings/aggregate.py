"""Earnings aggregation over parsed transactions.

Every function here recomputes its result from the full transaction list on
each call; nothing is cached or updated incrementally, so re-running after a
manual category edit always reflects the edit.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Sequence
from decimal import Decimal

from .categories import (
    BUNDLE,
    PPV_MESSAGE,
    SUBSCRIPTION,
    TIP,
    WELCOME,
    WELCOME_MESSAGE_LEGACY,
    category_group,
)
from .currency import ZERO, is_whole_amount
from .models import (
    CategoryTotals,
    EarningsStats,
    HourlySplit,
    HourlyTotal,
    SessionSummary,
    Transaction,
)

# Revenue that is not attributed to the chatter's own selling.
_NON_CHATTER_CATEGORIES = frozenset({TIP, SUBSCRIPTION, WELCOME})


def _totals(transactions: Sequence[Transaction]) -> CategoryTotals:
    return CategoryTotals(
        gross=sum((t.gross for t in transactions), ZERO),
        net=sum((t.net for t in transactions), ZERO),
        count=len(transactions),
    )


def _by_category(transactions: Sequence[Transaction], category: str) -> list[Transaction]:
    return [t for t in transactions if t.category == category]


def _hourly(transactions: Iterable[Transaction]) -> tuple[HourlyTotal, ...]:
    by_hour: dict[int, Decimal] = defaultdict(lambda: ZERO)
    for t in transactions:
        by_hour[t.hour] += t.net
    return tuple(
        HourlyTotal(hour=h, total=total) for h, total in sorted(by_hour.items()) if total > 0
    )


def is_whole_number_sale(t: Transaction) -> bool:
    """Whole-dollar sale made by the chatter (not a tip, sub or welcome)."""

    return is_whole_amount(t.gross) and t.category not in _NON_CHATTER_CATEGORIES


def aggregate(transactions: Iterable[Transaction]) -> EarningsStats:
    """Compute category totals and the hourly net breakdown.

    ``chatter_sales`` is whole-dollar sales (excluding tips, subscriptions and
    welcome messages) plus all tips. ``ppv_sales`` and ``bundle_sales`` cover
    only their own categories; ``overall`` covers everything.
    """

    txs = list(transactions)
    tips = _by_category(txs, TIP)
    whole_number_sales = [t for t in txs if is_whole_number_sale(t)]

    chatter = _totals(whole_number_sales + tips)
    return EarningsStats(
        chatter_sales=CategoryTotals(
            gross=chatter.gross,
            net=chatter.net,
            count=chatter.count,
            whole_number_count=len(whole_number_sales),
            tip_count=len(tips),
        ),
        tips=_totals(tips),
        ppv_sales=_totals(_by_category(txs, PPV_MESSAGE)),
        bundle_sales=_totals(_by_category(txs, BUNDLE)),
        subscriptions=_totals(_by_category(txs, SUBSCRIPTION)),
        welcome_messages=_totals(_by_category(txs, WELCOME)),
        overall=_totals(txs),
        hourly_breakdown=_hourly(txs),
    )


def summarize_session(transactions: Iterable[Transaction]) -> SessionSummary:
    """Headline counts shown next to the stats, using manual category groups."""

    txs = list(transactions)
    return SessionSummary(
        ppv_count=sum(1 for t in txs if category_group(t.category) == "ppv"),
        welcome_count=sum(1 for t in txs if t.category in (WELCOME, WELCOME_MESSAGE_LEGACY)),
        subscription_count=sum(
            1 for t in txs if t.category in (SUBSCRIPTION, "Recurring Subscription")
        ),
        total_gross=sum((t.gross for t in txs), ZERO),
        total_net=sum((t.net for t in txs), ZERO),
        total_transactions=len(txs),
    )


def _peak(series: tuple[HourlyTotal, ...]) -> int | None:
    if not series:
        return None
    # Earliest hour wins ties.
    return max(series, key=lambda h: (h.total, -h.hour)).hour


def hourly_split(transactions: Iterable[Transaction]) -> HourlySplit:
    """Hourly net revenue with subscriptions separated from other sales."""

    txs = list(transactions)
    sales = _hourly(t for t in txs if t.category != SUBSCRIPTION)
    subs = _hourly(t for t in txs if t.category == SUBSCRIPTION)
    return HourlySplit(
        sales=sales,
        subscriptions=subs,
        total_sales=sum((h.total for h in sales), ZERO),
        total_subscriptions=sum((h.total for h in subs), ZERO),
        peak_sales_hour=_peak(sales),
        peak_subscriptions_hour=_peak(subs),
    )


__all__ = ["aggregate", "hourly_split", "is_whole_number_sale", "summarize_session"]
