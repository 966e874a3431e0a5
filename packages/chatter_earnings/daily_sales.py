"""Per-day rollups handed to the sheet store.

The store keeps one row per (sheet, model, day) with net amounts bucketed by
sale type, plus the individual transactions. This module only builds those
payloads; writing them is the store's job. Bucketing matches on category
text (case-insensitive, substring) so that manual labels land in a bucket
without the store knowing the manual category table.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from .currency import ZERO, quantize_cents
from .models import Transaction

type SaleType = Literal["ppv", "tips", "subscription", "bundles", "other"]

_PPV_LABELS = frozenset({"ppv", "ppv message", "message", "payment for message"})
_TIP_LABELS = frozenset({"tip", "tips"})
_SUBSCRIPTION_LABELS = frozenset({"subscription", "recurring subscription"})
_BUNDLE_LABELS = frozenset({"bundle", "bundles"})

_LEDGER_DATE_FORMATS = ("%b %d, %Y", "%b %d,%Y")


def sale_type_for(category: str) -> SaleType:
    """Bucket a (possibly manual) category label for the daily rollup.

    Checked in order: PPV (label contains ``ppv`` or ``message``), tips,
    subscriptions, bundles; anything else is ``other``.
    """

    c = category.strip().lower()
    if c in _PPV_LABELS or "ppv" in c or "message" in c:
        return "ppv"
    if c in _TIP_LABELS or "tip" in c:
        return "tips"
    if c in _SUBSCRIPTION_LABELS or "subscription" in c:
        return "subscription"
    if c in _BUNDLE_LABELS or "bundle" in c:
        return "bundles"
    return "other"


def week_start_for(day: date) -> date:
    """Start of the sheet week containing ``day``; sheet weeks begin on Saturday."""

    # weekday(): Monday=0 .. Saturday=5, Sunday=6
    return day - timedelta(days=(day.weekday() - 5) % 7)


def parse_ledger_date(value: str) -> date:
    """Parse a captured ledger date such as ``"Oct 8, 2025"``.

    Raises ``ValueError`` when the value matches no known layout.
    """

    s = " ".join(value.split())
    for fmt in _LEDGER_DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise ValueError(f"invalid ledger date: {value!r}")


class DailySales(BaseModel):
    """One model's sales for one day, net amounts bucketed by sale type."""

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    model_id: str
    model_name: str
    sale_date: date
    gross_amount: Decimal
    net_amount: Decimal
    transaction_count: int
    ppv_count: int
    ppv_amount: Decimal
    subscription_count: int
    subscription_amount: Decimal
    tips_amount: Decimal
    bundles_amount: Decimal
    other_amount: Decimal

    @field_validator(
        "gross_amount",
        "net_amount",
        "ppv_amount",
        "subscription_amount",
        "tips_amount",
        "bundles_amount",
        "other_amount",
    )
    @classmethod
    def _cents(cls, v: Decimal) -> Decimal:
        return quantize_cents(v)

    @property
    def week_start(self) -> date:
        return week_start_for(self.sale_date)

    def to_row(self) -> dict[str, Any]:
        """Column mapping for the daily sales table (``sales_amount`` is net)."""

        return {
            "model_id": self.model_id,
            "sale_date": self.sale_date.isoformat(),
            "sales_amount": float(self.net_amount),
            "gross_amount": float(self.gross_amount),
            "net_amount": float(self.net_amount),
            "transaction_count": self.transaction_count,
            "ppv_amount": float(self.ppv_amount),
            "subscription_amount": float(self.subscription_amount),
            "tips_amount": float(self.tips_amount),
            "bundles_amount": float(self.bundles_amount),
            "other_amount": float(self.other_amount),
        }


class ModelTransactionRow(BaseModel):
    """A single transaction as stored alongside the daily rollup."""

    model_config = ConfigDict(frozen=True, extra="forbid", protected_namespaces=())

    model_id: str
    chatter_id: str
    transaction_date: date
    gross: Decimal
    net: Decimal
    fee: Decimal
    category: str
    description: str | None = None

    @field_validator("description")
    @classmethod
    def _blank_to_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


def _rollup(
    transactions: list[Transaction], *, model_id: str, model_name: str, sale_date: date
) -> DailySales:
    amounts: defaultdict[str, Decimal] = defaultdict(lambda: ZERO)
    counts: defaultdict[str, int] = defaultdict(int)
    for t in transactions:
        bucket = sale_type_for(t.category)
        amounts[bucket] += t.net
        counts[bucket] += 1

    return DailySales(
        model_id=model_id,
        model_name=model_name,
        sale_date=sale_date,
        gross_amount=sum((t.gross for t in transactions), ZERO),
        net_amount=sum((t.net for t in transactions), ZERO),
        transaction_count=len(transactions),
        ppv_count=counts["ppv"],
        ppv_amount=amounts["ppv"],
        subscription_count=counts["subscription"],
        subscription_amount=amounts["subscription"],
        tips_amount=amounts["tips"],
        bundles_amount=amounts["bundles"],
        other_amount=amounts["other"],
    )


def build_daily_sales(
    transactions: Iterable[Transaction],
    *,
    model_id: str,
    model_name: str,
    sale_date: date | None = None,
) -> list[DailySales]:
    """Roll transactions up into one :class:`DailySales` per day.

    With ``sale_date`` every transaction is booked on that day (a single
    session entered for one date). Without it transactions are grouped by
    their own ledger date, which must be parseable (``ValueError``
    otherwise). Results are sorted by date; empty input yields ``[]``.
    """

    txs = list(transactions)
    if not txs:
        return []

    by_day: dict[date, list[Transaction]] = defaultdict(list)
    for t in txs:
        by_day[sale_date or parse_ledger_date(t.date)].append(t)

    return [
        _rollup(by_day[d], model_id=model_id, model_name=model_name, sale_date=d)
        for d in sorted(by_day)
    ]


def build_transaction_rows(
    transactions: Iterable[Transaction],
    *,
    model_id: str,
    chatter_id: str,
    transaction_date: date,
) -> list[ModelTransactionRow]:
    return [
        ModelTransactionRow(
            model_id=model_id,
            chatter_id=chatter_id,
            transaction_date=transaction_date,
            gross=t.gross,
            net=t.net,
            fee=t.fee,
            category=t.category,
            description=t.description,
        )
        for t in transactions
    ]


__all__ = [
    "DailySales",
    "ModelTransactionRow",
    "build_daily_sales",
    "build_transaction_rows",
    "parse_ledger_date",
    "sale_type_for",
    "week_start_for",
]
