"""
Domain layer for the training dashboard service.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).
"""

from domain.models import (
    DashboardSnapshot,
    ExerciseEntry,
    ExerciseSnapshot,
    SessionStatus,
    SetEntry,
    WorkoutSession,
)

__all__ = [
    "DashboardSnapshot",
    "ExerciseEntry",
    "ExerciseSnapshot",
    "SessionStatus",
    "SetEntry",
    "WorkoutSession",
]
