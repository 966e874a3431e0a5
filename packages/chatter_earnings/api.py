"""Public orchestration for the ``chatter_earnings`` package.

Ties the parser and the aggregator together for hosts that want a single
call per paste, and re-aggregates after manual category edits. Each call
starts from its inputs; no state survives between calls.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import asdict, is_dataclass
from decimal import Decimal
from typing import Any

from .aggregate import aggregate, hourly_split, summarize_session
from .categories import override_category
from .config import Settings
from .models import LedgerReport, ParseResult, Transaction
from .parser import parse_transactions


def _report(parsed: ParseResult) -> LedgerReport:
    txs = parsed.transactions
    return LedgerReport(
        parsed=parsed,
        stats=aggregate(txs),
        summary=summarize_session(txs),
        hourly=hourly_split(txs),
    )


def analyze_ledger(text: str, *, settings: Settings | None = None) -> LedgerReport:
    """Parse pasted ledger text and aggregate the result in one step."""

    return _report(parse_transactions(text, settings=settings))


def apply_overrides(
    transactions: Sequence[Transaction], overrides: Mapping[int, str]
) -> tuple[Transaction, ...]:
    """Return ``transactions`` with manual categories applied by position.

    Raises ``IndexError`` for a position outside the list and ``ValueError``
    for an unknown category label.
    """

    out = list(transactions)
    for pos, category in overrides.items():
        if not 0 <= pos < len(out):
            raise IndexError(f"no transaction at position {pos}")
        out[pos] = override_category(out[pos], category)
    return tuple(out)


def recompute(report: LedgerReport, overrides: Mapping[int, str]) -> LedgerReport:
    """Rebuild a report after manual category edits."""

    parsed = report.parsed
    edited = apply_overrides(parsed.transactions, overrides)
    return _report(
        ParseResult(
            transactions=edited,
            skipped_lines=parsed.skipped_lines,
            currency=parsed.currency,
        )
    )


def _jsonable(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if is_dataclass(value) and not isinstance(value, type):
        return {k: _jsonable(v) for k, v in asdict(value).items()}
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, Iterable) and not isinstance(value, str):
        return [_jsonable(v) for v in value]
    return value


def report_to_dict(report: LedgerReport) -> dict[str, Any]:
    """JSON-ready view of a report (amounts as floats)."""

    return {
        "currency": report.parsed.currency,
        "transactions": _jsonable(report.parsed.transactions),
        "skipped_lines": list(report.parsed.skipped_lines),
        "stats": _jsonable(report.stats),
        "summary": _jsonable(report.summary),
        "hourly": _jsonable(report.hourly),
    }


__all__ = ["analyze_ledger", "apply_overrides", "recompute", "report_to_dict"]
