"""
Single-pass aggregation over a user's completed sessions.

The caller supplies sessions already ordered by session_date, most recent
first; the aggregator keeps that order and does not sort. Each session may be
a WorkoutSession or a raw stored document. Malformed nested data contributes
nothing rather than failing the run. Sessions with any status other than
completed are skipped; a document without a status is read as completed.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import Any, Dict, Iterable, List, Optional

from backend.core.dates import localize, resolve_now, resolve_timezone
from backend.core.volume import exercise_volume
from domain.converters import db_row_to_session
from domain.models import RecentWorkout, SessionStatus

logger = logging.getLogger(__name__)

RECENT_WORKOUTS_LIMIT = 5
WEEKLY_WINDOW = timedelta(days=7)
MONTHLY_WINDOW = timedelta(days=30)


@dataclass
class ExerciseCount:
    """How many sessions an exercise appeared in."""
    exercise_name: str
    count: int = 0


@dataclass
class HistoryAggregate:
    """Raw totals gathered from one pass over the session history."""
    total_workouts: int = 0
    total_volume: float = 0
    weekly_volume: float = 0
    monthly_volume: float = 0
    # Insertion order is first-encounter order
    exercise_counts: Dict[str, ExerciseCount] = field(default_factory=dict)
    recent_workouts: List[RecentWorkout] = field(default_factory=list)
    workout_dates: List[datetime] = field(default_factory=list)


def _type_label(value: Any) -> Optional[str]:
    if value is None:
        return None
    return getattr(value, "value", None) or str(value)


def aggregate_history(
    sessions: Iterable[Any],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> HistoryAggregate:
    """
    Scan every session once and collect dashboard totals.

    Args:
        sessions: Completed sessions, most recent first
        now: Reference instant for the trailing windows
        tz: Timezone used to read naive session dates

    Returns:
        HistoryAggregate
    """
    tz = tz or resolve_timezone(None)
    now = resolve_now(now, tz)
    week_start = now - WEEKLY_WINDOW
    month_start = now - MONTHLY_WINDOW

    result = HistoryAggregate()

    for document in sessions:
        session = db_row_to_session(document)
        if session.status and session.status != SessionStatus.COMPLETED:
            logger.debug("Session %s is %s; not aggregated", session.id, session.status)
            continue
        result.total_workouts += 1

        volume = 0
        seen_in_session = set()
        for entry in session.exercises or []:
            volume += exercise_volume(entry.sets or [])

            exercise_id = entry.exercise_id
            if not exercise_id or exercise_id in seen_in_session:
                continue
            seen_in_session.add(exercise_id)
            counted = result.exercise_counts.get(exercise_id)
            if counted is None:
                name = entry.exercise.name if entry.exercise else ""
                counted = result.exercise_counts[exercise_id] = ExerciseCount(exercise_name=name or "")
            counted.count += 1

        result.total_volume += volume

        session_date = session.session_date
        if session_date is None:
            logger.debug("Session %s has no readable session_date; skipped for windows and streaks", session.id)
        else:
            instant = localize(session_date, tz)
            if instant >= week_start:
                result.weekly_volume += volume
            if instant >= month_start:
                result.monthly_volume += volume
            result.workout_dates.append(session_date)

        if len(result.recent_workouts) < RECENT_WORKOUTS_LIMIT:
            result.recent_workouts.append(RecentWorkout(
                session_id=session.id,
                date=session_date,
                name=session.name or "",
                type=_type_label(session.type),
            ))

    return result
