"""
Converters: Database row format <-> domain WorkoutSession.

Session documents are written by several clients at different times, so
reading is lenient: missing or malformed nested data (no ``exercises``,
no ``sets``, non-numeric reps/weight, missing exercise snapshot) reads as
empty or zero instead of raising. Both snake_case and camelCase field names
are accepted.

Database schema (workout_sessions table):
- id: UUID
- user_id: Owner
- name, type: Display name and optional split label
- session_date: Calendar date of the workout
- status: not_started | in_progress | completed | abandoned
- exercises: JSONB list of exercise entries, each with a copied
  ``exercise`` descriptor and a ``sets`` list
- started_at, completed_at, created_at, updated_at: Timestamps
"""

import logging
import math
from collections.abc import Mapping
from datetime import date, datetime, time
from typing import Any, Dict, List, Optional, Union

from domain.models import (
    ExerciseEntry,
    ExerciseSnapshot,
    SessionStatus,
    SetEntry,
    WorkoutSession,
)

logger = logging.getLogger(__name__)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from various formats. Returns None when unreadable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # Handle ISO format with or without timezone
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None


def _field(row: Mapping, *names: str) -> Any:
    for name in names:
        if name in row and row[name] is not None:
            return row[name]
    return None


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _as_mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _non_negative(value: Any) -> float:
    """Read a count or weight; anything unusable reads as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value < 0:
        return 0
    return value


def _status(value: Any) -> Union[SessionStatus, str]:
    try:
        return SessionStatus(value)
    except ValueError:
        return str(value or "")


def row_to_set(row: Any, position: int) -> SetEntry:
    row = _as_mapping(row)
    set_number = _field(row, "set_number", "setNumber")
    return SetEntry.model_construct(
        id=str(_field(row, "id") or f"set-{position + 1}"),
        set_number=set_number if isinstance(set_number, int) and set_number > 0 else position + 1,
        reps=int(_non_negative(_field(row, "reps"))),
        weight=_non_negative(_field(row, "weight")),
        notes=_field(row, "notes"),
        logged_at=parse_datetime(_field(row, "logged_at", "loggedAt")),
    )


def row_to_exercise_entry(row: Any, position: int) -> ExerciseEntry:
    row = _as_mapping(row)
    descriptor = _as_mapping(_field(row, "exercise"))
    name = _field(descriptor, "name") or _field(row, "exercise_name", "exerciseName") or ""
    return ExerciseEntry.model_construct(
        id=str(_field(row, "id") or f"entry-{position}"),
        exercise_id=str(_field(row, "exercise_id", "exerciseId") or ""),
        exercise=ExerciseSnapshot.model_construct(
            name=str(name),
            muscle_group=_field(descriptor, "muscle_group", "muscleGroup"),
        ),
        order_index=_field(row, "order_index", "orderIndex") or position,
        sets=[row_to_set(s, i) for i, s in enumerate(_as_list(_field(row, "sets")))],
    )


def db_row_to_session(row: Union[WorkoutSession, Mapping, None]) -> WorkoutSession:
    """
    Convert a database row to a domain WorkoutSession without validation.

    Models pass through unchanged. ``session_date`` is None when the stored
    value cannot be parsed.

    Args:
        row: Dictionary representing a row from the workout_sessions table.

    Returns:
        WorkoutSession (constructed, not validated).
    """
    if isinstance(row, WorkoutSession):
        return row
    row = _as_mapping(row)

    exercises = [
        row_to_exercise_entry(raw, i)
        for i, raw in enumerate(_as_list(_field(row, "exercises")))
    ]

    session_id = str(_field(row, "id") or "")
    if not exercises and "exercises" not in row:
        logger.debug("Session %s has no exercises field", session_id)

    return WorkoutSession.model_construct(
        id=session_id,
        user_id=str(_field(row, "user_id", "userId") or ""),
        name=str(_field(row, "name") or ""),
        type=_field(row, "type"),
        template_id=_field(row, "template_id", "templateId"),
        session_date=parse_datetime(_field(row, "session_date", "sessionDate")),
        status=_status(_field(row, "status")),
        exercises=exercises,
        started_at=parse_datetime(_field(row, "started_at", "startedAt")),
        completed_at=parse_datetime(_field(row, "completed_at", "completedAt")),
    )


def session_to_db_row(session: WorkoutSession) -> Dict[str, Any]:
    """
    Convert a WorkoutSession to a database row for insert/update.

    Returns:
        Dictionary suitable for Supabase upsert.
    """
    return session.model_dump(mode="json")
