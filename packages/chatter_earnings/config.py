"""Environment-driven settings for the earnings engine.

Library functions never read the environment on their own; they accept a
:class:`Settings` instance and fall back to :data:`DEFAULT_SETTINGS`.
Entrypoints (the CLI, host services) call :func:`load_settings` after
``load_dotenv()`` so that a local ``.env`` can supply overrides.

Recognized variables
--------------------
- ``CHATTER_EARNINGS_TIMEZONE``: business timezone used for hour-of-day
  bucketing (default ``America/New_York``).
- ``CHATTER_EARNINGS_SOURCE_TIMEZONE``: timezone the pasted timestamps are
  expressed in; when unset they are read as business-local time.
- ``CHATTER_EARNINGS_WELCOME_PRICES``: comma-separated welcome-message price
  points (default ``15,12,11.99``).
- ``CHATTER_EARNINGS_DEFAULT_CURRENCY``: display symbol used when a batch
  contains none (default ``$``).
- ``CHATTER_EARNINGS_LOG_LEVEL``: level name for console logging from the
  CLI (default ``INFO``).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .currency import DEFAULT_CURRENCY, SUPPORTED_CURRENCY_SYMBOLS

BUSINESS_TIMEZONE = "America/New_York"

# Fixed-price welcome offers. Amounts at these price points are welcome
# messages whatever the description says.
WELCOME_PRICE_POINTS: frozenset[Decimal] = frozenset(
    {Decimal("15"), Decimal("12"), Decimal("11.99")}
)

_ENV_PREFIX = "CHATTER_EARNINGS_"


@dataclass(frozen=True, slots=True)
class Settings:
    business_timezone: str = BUSINESS_TIMEZONE
    source_timezone: str | None = None
    welcome_prices: frozenset[Decimal] = WELCOME_PRICE_POINTS
    default_currency: str = DEFAULT_CURRENCY
    log_level: str = "INFO"


DEFAULT_SETTINGS = Settings()


def _check_timezone(var: str, value: str) -> str:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"{var}: unknown timezone {value!r}") from exc
    return value


def _parse_prices(var: str, value: str) -> frozenset[Decimal]:
    prices: set[Decimal] = set()
    for part in value.split(","):
        p = part.strip().lstrip("".join(SUPPORTED_CURRENCY_SYMBOLS)).strip()
        if not p:
            continue
        try:
            d = Decimal(p)
        except InvalidOperation as exc:
            raise ValueError(f"{var}: invalid price {part.strip()!r}") from exc
        if not d.is_finite() or d <= 0:
            raise ValueError(f"{var}: prices must be positive, got {part.strip()!r}")
        prices.add(d)
    return frozenset(prices)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``environ`` (defaults to ``os.environ``).

    Raises ``ValueError`` naming the offending variable when a value is
    invalid. Unset or blank variables keep their defaults.
    """

    env = os.environ if environ is None else environ

    def _get(name: str) -> str | None:
        raw = env.get(_ENV_PREFIX + name)
        if raw is None or not raw.strip():
            return None
        return raw.strip()

    kwargs: dict[str, object] = {}

    tz = _get("TIMEZONE")
    if tz is not None:
        kwargs["business_timezone"] = _check_timezone(_ENV_PREFIX + "TIMEZONE", tz)

    src_tz = _get("SOURCE_TIMEZONE")
    if src_tz is not None:
        kwargs["source_timezone"] = _check_timezone(_ENV_PREFIX + "SOURCE_TIMEZONE", src_tz)

    prices = _get("WELCOME_PRICES")
    if prices is not None:
        kwargs["welcome_prices"] = _parse_prices(_ENV_PREFIX + "WELCOME_PRICES", prices)

    currency = _get("DEFAULT_CURRENCY")
    if currency is not None:
        if currency not in SUPPORTED_CURRENCY_SYMBOLS:
            raise ValueError(
                f"{_ENV_PREFIX}DEFAULT_CURRENCY: expected one of "
                f"{', '.join(SUPPORTED_CURRENCY_SYMBOLS)}, got {currency!r}"
            )
        kwargs["default_currency"] = currency

    level = _get("LOG_LEVEL")
    if level is not None:
        if level.upper() not in logging.getLevelNamesMapping():
            raise ValueError(f"{_ENV_PREFIX}LOG_LEVEL: unknown level {level!r}")
        kwargs["log_level"] = level.upper()

    return Settings(**kwargs)  # type: ignore[arg-type]


__all__ = [
    "BUSINESS_TIMEZONE",
    "DEFAULT_SETTINGS",
    "Settings",
    "WELCOME_PRICE_POINTS",
    "load_settings",
]
