"""
Progression router for exercise history and analytics.

This router provides endpoints for:
- Exercise history with per-session volume and best set
- All-time exercise stats (PR by estimated 1RM)
- The most recent session for an exercise
- Volume by ISO week or calendar month

All weights are stored in pounds; ``unit=kg`` converts for display.
"""
import logging
import re
from datetime import date, datetime
from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Path
from pydantic import BaseModel, Field

from api.deps import get_progression_service
from application.ports.exceptions import RepositoryUnavailableError
from backend.core.progression_service import ProgressionService
from backend.core.volume import estimated_1rm
from domain.models import ExerciseHistoryEntry, SetEntry, WeightUnit, to_display_weight

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}",
    tags=["Progression"],
)


# =============================================================================
# Response Models
# =============================================================================


class SetDetailResponse(BaseModel):
    """Response model for a single set."""
    set_number: int
    reps: int
    weight: float
    estimated_1rm: float = 0
    notes: Optional[str] = None


class HistoryEntryResponse(BaseModel):
    """Response model for one session in an exercise's history."""
    session_id: str
    session_date: Optional[datetime] = None
    exercise_name: str
    sets: List[SetDetailResponse] = Field(default_factory=list)
    total_volume: float = 0
    total_reps: int = 0
    best_set: Optional[SetDetailResponse] = None
    estimated_1rm: float = 0


class ExerciseHistoryApiResponse(BaseModel):
    """Response model for exercise history endpoint."""
    exercise_id: str
    unit: WeightUnit
    sessions: List[HistoryEntryResponse] = Field(default_factory=list)
    total: int


class ExerciseStatsApiResponse(BaseModel):
    """Response model for exercise stats endpoint."""
    exercise_id: str
    exercise_name: str
    unit: WeightUnit
    pr_weight: float = 0
    pr_reps: int = 0
    pr_date: Optional[datetime] = None
    estimated_1rm: float = 0
    total_sessions: int = 0
    last_performed: Optional[datetime] = None
    total_volume: float = 0


class VolumeBucketResponse(BaseModel):
    """A single period bucket."""
    period: str
    total_volume: float
    total_sets: int
    total_reps: int
    session_count: int


class VolumeByPeriodApiResponse(BaseModel):
    """Response model for volume by period endpoint."""
    period: str
    unit: WeightUnit
    data: List[VolumeBucketResponse]


# =============================================================================
# Helpers
# =============================================================================

# Exercise IDs are opaque document IDs or slugs
EXERCISE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


def _validate_exercise_id(exercise_id: str) -> None:
    """Validate exercise ID format."""
    if not EXERCISE_ID_PATTERN.match(exercise_id):
        raise HTTPException(
            status_code=400,
            detail="Invalid exercise_id format. Use letters, numbers, underscores and hyphens only."
        )


def _unavailable(e: RepositoryUnavailableError) -> HTTPException:
    logger.error(f"Session store unavailable: {e}")
    return HTTPException(status_code=503, detail="Session store unavailable. Try again later.")


def _set_response(set_entry: SetEntry, unit: WeightUnit) -> SetDetailResponse:
    return SetDetailResponse(
        set_number=set_entry.set_number,
        reps=set_entry.reps,
        weight=to_display_weight(set_entry.weight, unit),
        estimated_1rm=to_display_weight(estimated_1rm(set_entry.weight, set_entry.reps), unit),
        notes=set_entry.notes,
    )


def _history_response(entry: ExerciseHistoryEntry, unit: WeightUnit) -> HistoryEntryResponse:
    return HistoryEntryResponse(
        session_id=entry.session_id,
        session_date=entry.session_date,
        exercise_name=entry.exercise_name,
        sets=[_set_response(s, unit) for s in entry.sets],
        total_volume=to_display_weight(entry.total_volume, unit),
        total_reps=entry.total_reps,
        best_set=_set_response(entry.best_set, unit) if entry.best_set else None,
        estimated_1rm=to_display_weight(entry.estimated_1rm, unit),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("/exercises/{exercise_id}/stats", response_model=ExerciseStatsApiResponse)
def get_exercise_stats(
    user_id: str = Path(..., min_length=1),
    exercise_id: str = Path(..., description="Exercise ID"),
    unit: WeightUnit = Query("lb", description="Unit for weights"),
    service: ProgressionService = Depends(get_progression_service),
) -> ExerciseStatsApiResponse:
    """
    Get all-time stats for an exercise.

    An exercise the user never performed returns zeroed stats named "Unknown".
    """
    _validate_exercise_id(exercise_id)

    try:
        stats = service.get_exercise_stats(user_id, exercise_id)
    except RepositoryUnavailableError as e:
        raise _unavailable(e)

    return ExerciseStatsApiResponse(
        exercise_id=stats.exercise_id,
        exercise_name=stats.exercise_name,
        unit=unit,
        pr_weight=to_display_weight(stats.pr_weight, unit),
        pr_reps=stats.pr_reps,
        pr_date=stats.pr_date,
        estimated_1rm=to_display_weight(stats.estimated_1rm, unit),
        total_sessions=stats.total_sessions,
        last_performed=stats.last_performed,
        total_volume=to_display_weight(stats.total_volume, unit),
    )


@router.get("/exercises/{exercise_id}/history", response_model=ExerciseHistoryApiResponse)
def get_exercise_history(
    user_id: str = Path(..., min_length=1),
    exercise_id: str = Path(..., description="Exercise ID"),
    limit: Optional[int] = Query(None, ge=1, le=500, description="Maximum sessions to return"),
    unit: WeightUnit = Query("lb", description="Unit for weights"),
    service: ProgressionService = Depends(get_progression_service),
) -> ExerciseHistoryApiResponse:
    """
    Get the history of a specific exercise.

    Returns sessions where the exercise was performed, ordered by date descending.
    """
    _validate_exercise_id(exercise_id)

    try:
        history = service.get_exercise_history(user_id, exercise_id, limit=limit)
    except RepositoryUnavailableError as e:
        raise _unavailable(e)

    return ExerciseHistoryApiResponse(
        exercise_id=exercise_id,
        unit=unit,
        sessions=[_history_response(entry, unit) for entry in history],
        total=len(history),
    )


@router.get("/exercises/{exercise_id}/last", response_model=HistoryEntryResponse)
def get_last_performed(
    user_id: str = Path(..., min_length=1),
    exercise_id: str = Path(..., description="Exercise ID"),
    unit: WeightUnit = Query("lb", description="Unit for weights"),
    service: ProgressionService = Depends(get_progression_service),
) -> HistoryEntryResponse:
    """
    Get the most recent session in which the exercise was performed.

    Used to pre-fill weights when the exercise is logged again.
    """
    _validate_exercise_id(exercise_id)

    try:
        entry = service.get_last_performed(user_id, exercise_id)
    except RepositoryUnavailableError as e:
        raise _unavailable(e)

    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"No history found for exercise '{exercise_id}'"
        )
    return _history_response(entry, unit)


@router.get("/volume", response_model=VolumeByPeriodApiResponse)
def get_volume_by_period(
    user_id: str = Path(..., min_length=1),
    period: Literal["week", "month"] = Query("week", description="Bucket size"),
    start_date: Optional[date] = Query(None, description="Start of range (default: Jan 1 this year)"),
    end_date: Optional[date] = Query(None, description="End of range (default: now)"),
    unit: WeightUnit = Query("lb", description="Unit for volume"),
    service: ProgressionService = Depends(get_progression_service),
) -> VolumeByPeriodApiResponse:
    """
    Get training volume per ISO week ("2025-W03") or month ("2025-01").
    """
    if start_date and end_date and start_date > end_date:
        raise HTTPException(status_code=400, detail="start_date must not be after end_date")

    try:
        buckets = service.get_volume_by_period(user_id, period, start_date, end_date)
    except RepositoryUnavailableError as e:
        raise _unavailable(e)

    return VolumeByPeriodApiResponse(
        period=period,
        unit=unit,
        data=[
            VolumeBucketResponse(
                period=b.period,
                total_volume=to_display_weight(b.total_volume, unit),
                total_sets=b.total_sets,
                total_reps=b.total_reps,
                session_count=b.session_count,
            )
            for b in buckets
        ],
    )
