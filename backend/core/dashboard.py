"""
Dashboard snapshot builder.

build_dashboard_snapshot is a pure function of (sessions, now, tz). Both the
write-triggered recompute and any scheduled or on-demand recompute call it,
so every mode produces the same snapshot for the same inputs.
"""

from datetime import datetime, tzinfo
from typing import Any, Iterable, List, Optional

from backend.core.dates import resolve_now, resolve_timezone
from backend.core.history_aggregator import ExerciseCount, aggregate_history
from backend.core.streaks import calculate_streaks
from domain.models import DashboardSnapshot, TopExercise

TOP_EXERCISES_LIMIT = 5


def rank_exercises(counts: "dict[str, ExerciseCount]", limit: int = TOP_EXERCISES_LIMIT) -> List[TopExercise]:
    """
    Rank exercises by session count, highest first.

    Ties keep first-encounter order (sorted() is stable).
    """
    ranked = sorted(counts.items(), key=lambda item: -item[1].count)
    return [
        TopExercise(exercise_id=exercise_id, exercise_name=counted.exercise_name, count=counted.count)
        for exercise_id, counted in ranked[:limit]
    ]


def empty_snapshot(now: Optional[datetime] = None) -> DashboardSnapshot:
    """The snapshot of a user with no completed sessions."""
    return DashboardSnapshot(last_updated=now)


def build_dashboard_snapshot(
    sessions: Iterable[Any],
    *,
    now: Optional[datetime] = None,
    tz: Optional[tzinfo] = None,
) -> DashboardSnapshot:
    """
    Build a DashboardSnapshot from completed sessions.

    Args:
        sessions: Completed sessions ordered by session_date, most recent first
        now: Reference instant for windows and streaks (process clock if omitted)
        tz: Timezone defining calendar days (UTC if omitted)

    Returns:
        DashboardSnapshot with last_updated set to ``now``
    """
    tz = tz or resolve_timezone(None)
    now = resolve_now(now, tz)

    aggregate = aggregate_history(sessions, now=now, tz=tz)
    streaks = calculate_streaks(aggregate.workout_dates, now=now, tz=tz)

    return DashboardSnapshot(
        total_workouts=aggregate.total_workouts,
        total_volume=aggregate.total_volume,
        weekly_volume=aggregate.weekly_volume,
        monthly_volume=aggregate.monthly_volume,
        current_streak=streaks.current_streak,
        longest_streak=streaks.longest_streak,
        recent_workouts=aggregate.recent_workouts,
        top_exercises=rank_exercises(aggregate.exercise_counts),
        last_updated=now,
    )
