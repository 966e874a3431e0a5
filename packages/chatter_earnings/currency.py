"""Currency symbol handling and amount normalization.

Amounts are carried as :class:`~decimal.Decimal` throughout the package so
that whole-dollar checks and sums are exact. Parsing is symbol-agnostic: the
detected currency symbol is only used for display and export.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

SUPPORTED_CURRENCY_SYMBOLS: tuple[str, ...] = ("$", "£", "€")
DEFAULT_CURRENCY = "$"

CENT = Decimal("0.01")
ZERO = Decimal("0")

_SYMBOL_CLASS = "[" + "".join(re.escape(s) for s in SUPPORTED_CURRENCY_SYMBOLS) + "]"
_SYMBOL_RE = re.compile(_SYMBOL_CLASS)
_STRIP_RE = re.compile(_SYMBOL_CLASS + r"|[,\s]")
_LEADING_NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_NUMERIC_TOKEN_RE = re.compile(_SYMBOL_CLASS + r"?\d")


def parse_currency(raw: str | None) -> Decimal:
    """Return the decimal value of a currency cell such as ``"$1,234.50"``.

    Currency symbols, thousands separators and whitespace are removed and the
    leading decimal literal of what remains is parsed. Anything that does not
    yield a number, or is too long to round to cents, comes back as ``0``;
    this function never raises.
    """

    if raw is None:
        return ZERO
    cleaned = _STRIP_RE.sub("", str(raw))
    m = _LEADING_NUMBER_RE.match(cleaned)
    if not m:
        return ZERO
    try:
        value = Decimal(m.group(0))
        # Amounts must survive rounding to cents in the default context.
        value.quantize(CENT)
    except InvalidOperation:
        return ZERO
    return value


def detect_currency(text: str, default: str = DEFAULT_CURRENCY) -> str:
    """Return the first supported currency symbol found in ``text``."""

    m = _SYMBOL_RE.search(text or "")
    return m.group(0) if m else default


def has_numeric_token(text: str) -> bool:
    """Whether ``text`` holds something that looks like an amount or number."""

    return bool(_NUMERIC_TOKEN_RE.search(text or ""))


def is_whole_amount(amount: Decimal) -> bool:
    """Whether ``amount`` has a zero cents component once rounded to cents."""

    cents = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    return cents == cents.to_integral_value()


def quantize_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def format_amount(amount: Decimal, symbol: str = DEFAULT_CURRENCY) -> str:
    # Exactly two decimals, symbol prefixed, no thousands separators.
    return f"{symbol}{quantize_cents(amount):.2f}"


__all__ = [
    "CENT",
    "DEFAULT_CURRENCY",
    "SUPPORTED_CURRENCY_SYMBOLS",
    "ZERO",
    "detect_currency",
    "format_amount",
    "has_numeric_token",
    "is_whole_amount",
    "parse_currency",
    "quantize_cents",
]
