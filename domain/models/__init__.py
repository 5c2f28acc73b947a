"""
Domain models for the training dashboard service.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services):
- WorkoutSession: the aggregate root holding exercises and logged sets
- ExerciseEntry / SetEntry: what was performed and logged
- DashboardSnapshot and friends: derived statistics

Usage:
    >>> from datetime import datetime
    >>> from domain.models import WorkoutSession, ExerciseSnapshot

    >>> session = WorkoutSession(user_id="u1", session_date=datetime(2025, 1, 6))
    >>> entry = session.add_exercise("bench", ExerciseSnapshot(name="Bench Press"))
"""

from domain.models.dashboard import (
    DashboardSnapshot,
    ExerciseHistoryEntry,
    ExerciseStats,
    RecentWorkout,
    TopExercise,
    VolumeAggregate,
)
from domain.models.session import (
    ExerciseEntry,
    ExerciseSnapshot,
    SessionStateError,
    SessionStatus,
    SetEntry,
    WorkoutSession,
    WorkoutType,
)
from domain.models.weight import (
    CANONICAL_UNIT,
    KG_TO_LB,
    WeightUnit,
    convert_weight,
    to_display_weight,
    to_storage_weight,
)

__all__ = [
    # Sessions
    "WorkoutSession",
    "ExerciseEntry",
    "ExerciseSnapshot",
    "SetEntry",
    "SessionStatus",
    "SessionStateError",
    "WorkoutType",
    # Derived statistics
    "DashboardSnapshot",
    "RecentWorkout",
    "TopExercise",
    "ExerciseStats",
    "ExerciseHistoryEntry",
    "VolumeAggregate",
    # Units
    "WeightUnit",
    "CANONICAL_UNIT",
    "KG_TO_LB",
    "convert_weight",
    "to_display_weight",
    "to_storage_weight",
]
