"""
Progression Service for Exercise Tracking.

This module provides the per-exercise read API on top of completed sessions:
- Exercise history with per-session volume and best set
- All-time stats (personal record by estimated 1RM)
- Volume bucketed by ISO week or calendar month

Nothing here is persisted; every call reads the session store.
"""
from typing import Optional, List, Dict, Union
from datetime import date, datetime, time, tzinfo
import logging

from application.ports.session_repository import SessionRepository
from backend.core.dates import iso_week_key, localize, month_key, resolve_now, resolve_timezone
from backend.core.volume import best_set, estimated_1rm, exercise_volume
from domain.converters import db_row_to_session
from domain.models import (
    ExerciseHistoryEntry,
    ExerciseStats,
    VolumeAggregate,
    WorkoutSession,
)

logger = logging.getLogger(__name__)

UNKNOWN_EXERCISE_NAME = "Unknown"
VOLUME_PERIODS = ("week", "month")

DateLike = Union[date, datetime]


def build_history_entry(session: WorkoutSession, exercise_id: str) -> Optional[ExerciseHistoryEntry]:
    """
    Describe how ``exercise_id`` was performed in ``session``.

    Only the first entry for the exercise is used when it appears more than
    once in the session. Returns None if the exercise is absent.
    """
    entry = next((e for e in session.exercises or [] if e.exercise_id == exercise_id), None)
    if entry is None:
        return None

    sets = list(entry.sets or [])
    top = best_set(sets)
    return ExerciseHistoryEntry(
        session_id=session.id,
        session_date=session.session_date,
        exercise_id=exercise_id,
        exercise_name=(entry.exercise.name if entry.exercise else "") or UNKNOWN_EXERCISE_NAME,
        sets=sets,
        total_volume=exercise_volume(sets),
        total_reps=sum(s.reps for s in sets),
        best_set=top,
        estimated_1rm=estimated_1rm(top.weight, top.reps) if top else 0,
    )


class ProgressionService:
    """
    Service for exercise progression tracking and analytics.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        *,
        tz: Optional[tzinfo] = None,
    ):
        """
        Initialize the progression service.

        Args:
            session_repo: Source of completed sessions
            tz: Timezone used for period buckets and default date ranges
        """
        self._session_repo = session_repo
        self._tz = tz or resolve_timezone(None)

    def get_exercise_history(
        self,
        user_id: str,
        exercise_id: str,
        limit: Optional[int] = None,
    ) -> List[ExerciseHistoryEntry]:
        """
        Get the sessions in which an exercise was performed, most recent first.

        Args:
            user_id: User ID
            exercise_id: Exercise ID
            limit: Maximum entries to return (all when None)

        Returns:
            List of ExerciseHistoryEntry
        """
        history: List[ExerciseHistoryEntry] = []
        if limit is not None and limit <= 0:
            return history

        for document in self._session_repo.list_completed_sessions(user_id):
            entry = build_history_entry(db_row_to_session(document), exercise_id)
            if entry is None:
                continue
            history.append(entry)
            if limit is not None and len(history) >= limit:
                break

        return history

    def get_last_performed(self, user_id: str, exercise_id: str) -> Optional[ExerciseHistoryEntry]:
        """Most recent session entry for the exercise, or None if never performed."""
        history = self.get_exercise_history(user_id, exercise_id, limit=1)
        return history[0] if history else None

    def get_exercise_stats(self, user_id: str, exercise_id: str) -> ExerciseStats:
        """
        All-time statistics for an exercise.

        The personal record is the best set of the session with the highest
        estimated 1RM. On a tie the more recent session keeps the record.
        """
        history = self.get_exercise_history(user_id, exercise_id)
        stats = ExerciseStats(exercise_id=exercise_id)
        if not history:
            return stats

        stats.exercise_name = history[0].exercise_name
        stats.total_sessions = len(history)
        stats.last_performed = history[0].session_date

        for entry in history:
            stats.total_volume += entry.total_volume
            if entry.best_set is not None and entry.estimated_1rm > stats.estimated_1rm:
                stats.estimated_1rm = entry.estimated_1rm
                stats.pr_weight = entry.best_set.weight
                stats.pr_reps = entry.best_set.reps
                stats.pr_date = entry.session_date

        return stats

    def get_volume_by_period(
        self,
        user_id: str,
        period: str,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        *,
        now: Optional[datetime] = None,
    ) -> List[VolumeAggregate]:
        """
        Total volume per ISO week or calendar month.

        Args:
            user_id: User ID
            period: "week" (keys like "2025-W03") or "month" (keys like "2025-01")
            start: Range start, inclusive (default: Jan 1 of the current year)
            end: Range end, inclusive (default: now)
            now: Reference instant for the defaults

        Returns:
            Buckets in chronological order; periods without sessions are omitted

        Raises:
            ValueError: if period is not "week" or "month"
        """
        if period not in VOLUME_PERIODS:
            raise ValueError(f"period must be one of {VOLUME_PERIODS}, got {period!r}")

        now = resolve_now(now, self._tz)
        range_start = self._range_bound(start, start_of_day=True) if start else \
            datetime(now.year, 1, 1, tzinfo=self._tz)
        range_end = self._range_bound(end, start_of_day=False) if end else now

        sessions = self._session_repo.list_completed_sessions(
            user_id,
            start_date=range_start.date(),
            end_date=range_end.date(),
        )

        key_for = iso_week_key if period == "week" else month_key
        buckets: Dict[str, VolumeAggregate] = {}

        for document in sessions:
            session = db_row_to_session(document)
            if session.session_date is None:
                continue
            instant = localize(session.session_date, self._tz)
            if instant < range_start or instant > range_end:
                continue

            key = key_for(instant.date())
            bucket = buckets.get(key)
            if bucket is None:
                bucket = buckets[key] = VolumeAggregate(period=key)

            bucket.session_count += 1
            for entry in session.exercises or []:
                sets = entry.sets or []
                bucket.total_volume += exercise_volume(sets)
                bucket.total_sets += len(sets)
                bucket.total_reps += sum(s.reps for s in sets)

        return [buckets[key] for key in sorted(buckets)]

    def _range_bound(self, value: DateLike, *, start_of_day: bool) -> datetime:
        """A plain date covers the whole day; datetimes are taken as given."""
        if isinstance(value, datetime):
            return localize(value, self._tz)
        bound = datetime.combine(value, time.min if start_of_day else time.max)
        return bound.replace(tzinfo=self._tz)
