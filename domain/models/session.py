"""
Workout session aggregate and its logged exercises/sets.

A WorkoutSession is the unit of aggregation input. Each session holds an
ordered list of ExerciseEntry, and each entry holds an ordered list of
SetEntry. Exercise metadata is copied into the entry when the exercise is
added (ExerciseSnapshot), so later edits to the canonical exercise never
change how historical sessions read.

Examples:
    >>> from datetime import datetime
    >>> session = WorkoutSession(
    ...     id="s1", user_id="u1", name="Push Day",
    ...     session_date=datetime(2025, 1, 6, 18, 0),
    ... )
    >>> entry = session.add_exercise("bench", ExerciseSnapshot(name="Bench Press"))
    >>> entry.add_set(reps=8, weight=185).set_number
    1
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SessionStatus(str, Enum):
    """Lifecycle states for a workout session."""

    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class WorkoutType(str, Enum):
    """Optional workout split label."""

    UPPER = "upper"
    LOWER = "lower"
    LEGS = "legs"
    PUSH = "push"
    PULL = "pull"


class SessionStateError(ValueError):
    """Raised when a lifecycle transition is not allowed from the current status."""


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SetEntry(BaseModel):
    """One logged set. Weight is stored in the canonical unit (lb)."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    set_number: int = Field(..., ge=1, description="1-based, contiguous within the exercise entry")
    reps: int = Field(..., ge=0)
    weight: float = Field(..., ge=0, description="Weight in pounds")
    notes: Optional[str] = Field(default=None, max_length=500)
    logged_at: Optional[datetime] = Field(default_factory=_utcnow)

    # Optional advanced tracking
    rest_duration: Optional[int] = Field(default=None, ge=0, description="Rest before this set, seconds")
    rpe: Optional[float] = Field(default=None, ge=1, le=10)
    tempo: Optional[str] = Field(default=None, description="e.g. '3-1-2'")


class ExerciseSnapshot(BaseModel):
    """Exercise metadata copied at the time the exercise joined the session."""

    name: str = Field(default="")
    muscle_group: Optional[str] = None


class ExerciseEntry(BaseModel):
    """One exercise performed within a session."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    exercise_id: str
    exercise: ExerciseSnapshot = Field(default_factory=ExerciseSnapshot)
    order_index: int = Field(default=0, ge=0)
    sets: List[SetEntry] = Field(default_factory=list)

    @property
    def next_set_number(self) -> int:
        if not self.sets:
            return 1
        return max(s.set_number for s in self.sets) + 1

    def add_set(
        self,
        *,
        reps: int,
        weight: float,
        notes: Optional[str] = None,
        logged_at: Optional[datetime] = None,
    ) -> SetEntry:
        """Append a set with the next set number."""
        entry = SetEntry(
            set_number=self.next_set_number,
            reps=reps,
            weight=weight,
            notes=notes,
            logged_at=logged_at or _utcnow(),
        )
        self.sets.append(entry)
        return entry

    def remove_set(self, set_id: str) -> None:
        """Remove a set and renumber the rest 1..n in logging order."""
        remaining = [s for s in self.sets if s.id != set_id]
        if len(remaining) == len(self.sets):
            raise KeyError(f"Set not found: {set_id}")
        # Sets without a timestamp keep their relative position at the end
        remaining.sort(key=lambda s: (s.logged_at is None, s.logged_at.timestamp() if s.logged_at else 0))
        for number, set_entry in enumerate(remaining, start=1):
            set_entry.set_number = number
        self.sets = remaining

    @property
    def volume(self) -> float:
        return sum(s.reps * s.weight for s in self.sets)


class WorkoutSession(BaseModel):
    """
    Aggregate root for a single workout.

    Only sessions with status ``completed`` participate in dashboard
    aggregation. ``session_date`` is the calendar date of the workout and
    is independent from ``completed_at``.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    name: str = Field(default="Workout", max_length=200)
    type: Optional[WorkoutType] = None
    template_id: Optional[str] = None
    session_date: datetime
    status: SessionStatus = SessionStatus.NOT_STARTED
    exercises: List[ExerciseEntry] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def is_completed(self) -> bool:
        return self.status == SessionStatus.COMPLETED

    def start(self, at: Optional[datetime] = None) -> None:
        if self.status != SessionStatus.NOT_STARTED:
            raise SessionStateError(f"Cannot start a session that is {self.status.value}")
        self.status = SessionStatus.IN_PROGRESS
        self.started_at = at or _utcnow()
        self._touch()

    def complete(self, at: Optional[datetime] = None) -> None:
        if self.status != SessionStatus.IN_PROGRESS:
            raise SessionStateError(f"Cannot complete a session that is {self.status.value}")
        self.status = SessionStatus.COMPLETED
        self.completed_at = at or _utcnow()
        self._touch()

    def abandon(self) -> None:
        if self.status in (SessionStatus.COMPLETED, SessionStatus.ABANDONED):
            raise SessionStateError(f"Cannot abandon a session that is {self.status.value}")
        self.status = SessionStatus.ABANDONED
        self._touch()

    # -------------------------------------------------------------------------
    # Exercises
    # -------------------------------------------------------------------------

    def add_exercise(self, exercise_id: str, exercise: ExerciseSnapshot) -> ExerciseEntry:
        """Append an exercise, storing a copy of its descriptor."""
        entry = ExerciseEntry(
            exercise_id=exercise_id,
            exercise=exercise.model_copy(),
            order_index=len(self.exercises),
        )
        self.exercises.append(entry)
        self._touch()
        return entry

    def remove_exercise(self, entry_id: str) -> None:
        remaining = [e for e in self.exercises if e.id != entry_id]
        if len(remaining) == len(self.exercises):
            raise KeyError(f"Exercise entry not found: {entry_id}")
        self.exercises = remaining
        self._renumber()

    def reorder_exercises(self, entry_ids: List[str]) -> None:
        """Reorder entries to match ``entry_ids`` exactly."""
        by_id = {e.id: e for e in self.exercises}
        if sorted(entry_ids) != sorted(by_id):
            raise ValueError("entry_ids must contain every exercise entry exactly once")
        self.exercises = [by_id[entry_id] for entry_id in entry_ids]
        self._renumber()

    def get_exercise(self, entry_id: str) -> Optional[ExerciseEntry]:
        return next((e for e in self.exercises if e.id == entry_id), None)

    @property
    def volume(self) -> float:
        return sum(e.volume for e in self.exercises)

    def to_document(self) -> Dict[str, Any]:
        """Serialize for storage (JSON-compatible)."""
        return self.model_dump(mode="json")

    def _renumber(self) -> None:
        for index, entry in enumerate(self.exercises):
            entry.order_index = index
        self._touch()

    def _touch(self) -> None:
        self.updated_at = _utcnow()
