"""
Workout streak calculation.

A streak is a run of consecutive calendar days with at least one completed
session. Day gaps of up to STREAK_GAP_TOLERANCE_DAYS are treated as
consecutive; the tolerance absorbs day-key artifacts around timezone
boundaries and does not forgive a missed day.

"today" and "yesterday" are fixed once per call from ``now`` in ``tz``. When
``now`` is omitted the process clock is used, so two calls that straddle
midnight can disagree by one day.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Any, Iterable, List, Optional

from backend.core.dates import day_key, resolve_now, resolve_timezone

STREAK_GAP_TOLERANCE_DAYS = 1.5


@dataclass(frozen=True)
class StreakResult:
    current_streak: int = 0
    longest_streak: int = 0


def unique_days_desc(dates: Iterable[Any], tz: tzinfo) -> List[date]:
    """Distinct calendar days, most recent first. Unreadable dates are dropped."""
    days = {key for key in (day_key(value, tz) for value in dates) if key is not None}
    return sorted(days, reverse=True)


def _is_consecutive(newer: date, older: date) -> bool:
    return (newer - older).days <= STREAK_GAP_TOLERANCE_DAYS


def longest_streak(days: List[date]) -> int:
    """Longest consecutive run in a descending list of unique days."""
    if not days:
        return 0
    longest = run = 1
    for newer, older in zip(days, days[1:]):
        run = run + 1 if _is_consecutive(newer, older) else 1
        longest = max(longest, run)
    return longest


def current_streak(days: List[date], today: date) -> int:
    """
    Length of the run that starts at the most recent workout day.

    The run only counts when the most recent day is today, or yesterday is
    one of the two most recent days (no workout logged yet today).
    """
    if not days:
        return 0
    yesterday = today - timedelta(days=1)
    if days[0] != today and yesterday not in days[:2]:
        return 0

    count = 1
    for newer, older in zip(days, days[1:]):
        if not _is_consecutive(newer, older):
            break
        count += 1
    return count


def calculate_streaks(
    dates: Iterable[Any],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> StreakResult:
    """
    Compute current and longest streaks from workout dates.

    Args:
        dates: Workout dates in any order; duplicates and time-of-day are fine
        now: Reference instant for "today" (defaults to the process clock)
        tz: Timezone that defines calendar days (defaults to UTC)

    Returns:
        StreakResult with both streaks, 0 for no dates
    """
    tz = tz or resolve_timezone(None)
    today = resolve_now(now, tz).date()
    days = unique_days_desc(dates, tz)
    return StreakResult(
        current_streak=current_streak(days, today),
        longest_streak=longest_streak(days),
    )
