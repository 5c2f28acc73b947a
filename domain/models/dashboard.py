"""
Derived statistics models.

DashboardSnapshot is wholly derived from a user's completed sessions and can
be discarded and rebuilt at any time. The remaining models are computed on
demand and never persisted.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from domain.models.session import SetEntry


class RecentWorkout(BaseModel):
    """A completed session reduced to what the dashboard lists."""

    session_id: str
    date: Optional[datetime] = None
    name: str = ""
    type: Optional[str] = None


class TopExercise(BaseModel):
    """An exercise ranked by the number of sessions it appeared in."""

    exercise_id: str
    exercise_name: str = ""
    count: int = Field(default=0, ge=0)


class DashboardSnapshot(BaseModel):
    """The persisted dashboard record for one user."""

    total_workouts: int = 0
    total_volume: float = 0
    weekly_volume: float = 0
    monthly_volume: float = 0
    current_streak: int = 0
    longest_streak: int = 0
    recent_workouts: List[RecentWorkout] = Field(default_factory=list)
    top_exercises: List[TopExercise] = Field(default_factory=list)
    last_updated: Optional[datetime] = None


class ExerciseHistoryEntry(BaseModel):
    """How one exercise was performed in one session."""

    session_id: str
    session_date: Optional[datetime] = None
    exercise_id: str
    exercise_name: str = "Unknown"
    sets: List[SetEntry] = Field(default_factory=list)
    total_volume: float = 0
    total_reps: int = 0
    best_set: Optional[SetEntry] = None
    estimated_1rm: float = 0


class ExerciseStats(BaseModel):
    """All-time statistics for one exercise."""

    exercise_id: str
    exercise_name: str = "Unknown"
    pr_weight: float = 0
    pr_reps: int = 0
    pr_date: Optional[datetime] = None
    estimated_1rm: float = 0
    total_sessions: int = 0
    last_performed: Optional[datetime] = None
    total_volume: float = 0


class VolumeAggregate(BaseModel):
    """Volume rolled up into a week ("YYYY-Www") or month ("YYYY-MM") bucket."""

    period: str
    total_volume: float = 0
    total_sets: int = 0
    total_reps: int = 0
    session_count: int = 0
