"""Hour-of-day resolution for ledger timestamps."""

from __future__ import annotations

import re
from datetime import datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .config import BUSINESS_TIMEZONE
from .logging_setup import get_logger

_LOG = get_logger("chatter_earnings.hours")

_STAMP_FORMAT = "%b %d, %Y %I:%M %p"
_HOUR_RE = re.compile(r"(\d+):")
_MERIDIEM_RE = re.compile(r"\s*([ap])\.?m\.?\s*$", re.IGNORECASE)


def _normalize_date(date: str) -> str:
    # "Oct  8,2025" -> "Oct 8, 2025"
    s = " ".join(date.split())
    return re.sub(r"\s*,\s*", ", ", s)


def _normalize_time(time: str) -> str:
    # "11:54am" / "11:54 AM" -> "11:54 AM"
    s = "".join(time.split())
    return _MERIDIEM_RE.sub(lambda m: f" {m.group(1).upper()}M", s)


def _hour_from_text(time: str) -> int | None:
    m = _HOUR_RE.search(time)
    if not m:
        return None
    hour = int(m.group(1))
    t = time.lower()
    if "pm" in t and hour != 12:
        hour += 12
    elif "am" in t and hour == 12:
        hour = 0
    return hour if 0 <= hour <= 23 else None


def resolve_hour(
    date: str,
    time: str,
    *,
    business_tz: str = BUSINESS_TIMEZONE,
    source_tz: str | None = None,
) -> int:
    """Return the hour of day (0-23) of ``date`` + ``time`` in ``business_tz``.

    The stamp is read as local time in ``source_tz`` when given (and converted
    to the business timezone), otherwise directly as business-local time.
    When the stamp cannot be parsed or a zone is unknown, the hour is read
    from the leading digits of ``time`` with 12-hour clock rules. Returns ``0`` if both fail.
    """

    try:
        stamp = f"{_normalize_date(date)} {_normalize_time(time)}"
        naive = datetime.strptime(stamp, _STAMP_FORMAT)
        business = ZoneInfo(business_tz)
        if source_tz is None:
            return naive.replace(tzinfo=business).hour
        return naive.replace(tzinfo=ZoneInfo(source_tz)).astimezone(business).hour
    except ZoneInfoNotFoundError:
        _LOG.warning("unknown timezone %r or %r; reading hour from text", business_tz, source_tz)
    except ValueError:
        _LOG.debug("falling back to text hour for %r %r", date, time)

    hour = _hour_from_text(time)
    if hour is None:
        _LOG.debug("no hour found in %r; using 0", time)
        return 0
    return hour


__all__ = ["resolve_hour"]
