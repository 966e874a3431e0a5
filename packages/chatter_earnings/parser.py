"""Ledger text → :class:`~chatter_earnings.models.Transaction` records.

Input is the text a user copies out of the payment platform's earnings
table: one transaction per line, in one of two column layouts::

    Oct 8, 2025 11:54 am  $14.99  $3.00  $11.99  Recurring subscription from X
    Oct 8, 2025 11:54 am  $14.99  $11.99  Recurring subscription from X

Fields are separated by runs of whitespace (spaces or tabs). Long
descriptions are sometimes wrapped onto the next physical line; such lines
carry no numbers and are merged into the preceding transaction.

Malformed input is the common case, not an exceptional one, so nothing here
raises for bad data: lines that look like data but fit neither layout are
returned in ``skipped_lines``; everything else without digits is ignored.
"""

from __future__ import annotations

import re
from decimal import Decimal

from .categorize import categorize
from .config import DEFAULT_SETTINGS, Settings
from .currency import (
    SUPPORTED_CURRENCY_SYMBOLS,
    ZERO,
    detect_currency,
    has_numeric_token,
    parse_currency,
)
from .hours import resolve_hour
from .logging_setup import get_logger
from .models import ParseResult, Transaction

_LOG = get_logger("chatter_earnings.parser")

_SYM = "[" + "".join(re.escape(s) for s in SUPPORTED_CURRENCY_SYMBOLS) + "]"
_DATE = r"(?P<date>[A-Za-z]{3}\s+\d{1,2},\s*\d{4})"
_TIME = r"(?P<time>\d{1,2}:\d{2}\s*[ap]m)"


def _amount(name: str) -> str:
    return rf"(?P<{name}>(?:{_SYM}\s*)?\d[\d,]*(?:\.\d{{0,2}})?)"


# Layouts are tried in this order; the fee-bearing one wins any ambiguity.
PRIMARY_PATTERN = re.compile(
    rf"^{_DATE}\s*{_TIME}"
    rf"\s+{_amount('gross')}\s+{_amount('fee')}\s+{_amount('net')}"
    r"\s+(?P<desc>.+)$",
    re.IGNORECASE,
)
FALLBACK_PATTERN = re.compile(
    rf"^{_DATE}\s*{_TIME}"
    rf"\s+{_amount('gross')}\s+{_amount('net')}"
    r"\s+(?P<desc>.+)$",
    re.IGNORECASE,
)


def _match_line(line: str) -> tuple[re.Match[str], bool] | None:
    m = PRIMARY_PATTERN.match(line)
    if m:
        return m, True
    m = FALLBACK_PATTERN.match(line)
    if m:
        return m, False
    return None


def derive_fee(gross: Decimal, net: Decimal) -> Decimal:
    """Fee implied by a line without a fee column, floored at zero."""

    return max(ZERO, gross - net)


def parse_line(
    line: str,
    currency: str,
    *,
    settings: Settings | None = None,
) -> Transaction | None:
    """Parse a single ledger line.

    Returns ``None`` for lines without digits, lines matching neither layout,
    and degenerate lines whose gross and net are both zero. ``currency`` is
    the batch's display symbol; amount parsing does not depend on it.
    """

    s = settings or DEFAULT_SETTINGS
    trimmed = line.strip()
    if not has_numeric_token(trimmed):
        return None

    matched = _match_line(trimmed)
    if matched is None:
        return None
    m, has_fee = matched

    gross = parse_currency(m.group("gross"))
    net = parse_currency(m.group("net"))
    if gross == 0 and net == 0:
        return None
    fee = max(ZERO, parse_currency(m.group("fee"))) if has_fee else derive_fee(gross, net)

    date = m.group("date")
    time = m.group("time")
    description = m.group("desc").strip()
    return Transaction(
        date=date,
        time=time,
        gross=gross,
        fee=fee,
        net=net,
        description=description,
        category=categorize(description, gross, welcome_prices=s.welcome_prices),
        hour=resolve_hour(
            date,
            time,
            business_tz=s.business_timezone,
            source_tz=s.source_timezone,
        ),
    )


def parse_transactions(text: str, *, settings: Settings | None = None) -> ParseResult:
    """Parse a full pasted ledger.

    Transactions keep input order. Lines following a parsed transaction that
    contain no numbers are treated as the wrapped tail of its description.
    """

    s = settings or DEFAULT_SETTINGS
    lines = [ln for ln in (text or "").splitlines() if ln.strip()]
    currency = detect_currency(text or "", s.default_currency)

    transactions: list[Transaction] = []
    skipped: list[str] = []

    i = 0
    while i < len(lines):
        line = lines[i]
        tx = parse_line(line, currency, settings=s)
        if tx is not None:
            parts = [tx.description]
            while i + 1 < len(lines) and not has_numeric_token(lines[i + 1]):
                parts.append(lines[i + 1].strip())
                i += 1
            if len(parts) > 1:
                tx = tx.with_description(" ".join(parts))
            transactions.append(tx)
        elif has_numeric_token(line):
            _LOG.debug("skipping unrecognized line: %r", line)
            skipped.append(line)
        i += 1

    _LOG.debug(
        "parsed %d transaction(s), skipped %d line(s), currency %s",
        len(transactions),
        len(skipped),
        currency,
    )
    return ParseResult(
        transactions=tuple(transactions),
        skipped_lines=tuple(skipped),
        currency=currency,
    )


__all__ = [
    "FALLBACK_PATTERN",
    "PRIMARY_PATTERN",
    "derive_fee",
    "parse_line",
    "parse_transactions",
]
