"""
Date and day-boundary helpers shared by the aggregation code.

Stored dates arrive as datetimes, plain dates, or ISO strings (with or
without an offset). Everything is normalised into an aware datetime in the
caller-supplied timezone before comparing or bucketing.
"""

from datetime import date, datetime, tzinfo
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from domain.converters import parse_datetime


def resolve_timezone(name: Optional[str]) -> tzinfo:
    """Look up an IANA timezone name. ``None`` or empty means UTC."""
    try:
        return ZoneInfo(name or "UTC")
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Unknown timezone: {name}") from e


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Express ``value`` in ``tz``. Naive values are taken as already local."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def to_instant(value: Any, tz: tzinfo) -> Optional[datetime]:
    parsed = parse_datetime(value)
    if parsed is None:
        return None
    return localize(parsed, tz)


def day_key(value: Any, tz: tzinfo) -> Optional[date]:
    """Calendar day of ``value`` in ``tz`` (time of day dropped)."""
    instant = to_instant(value, tz)
    return instant.date() if instant is not None else None


def resolve_now(now: Optional[datetime], tz: tzinfo) -> datetime:
    """Use the injected clock when given, the process clock otherwise."""
    if now is None:
        return datetime.now(tz)
    return localize(now, tz)


def iso_week_key(day: date) -> str:
    """
    ISO week bucket key.

    Examples:
        >>> iso_week_key(date(2025, 1, 1))
        '2025-W01'
        >>> iso_week_key(date(2024, 12, 30))
        '2025-W01'
    """
    iso_year, iso_week, _ = day.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def month_key(day: date) -> str:
    return f"{day.year}-{day.month:02d}"
