"""
Volume and estimated one-rep-max calculations.

Volume is reps x weight, summed over sets. The estimated 1RM uses the Epley
formula, which is tuned for the 1-10 rep range; higher rep counts are
extrapolated without correction.
"""

import math
from typing import Iterable, Optional, Protocol, Sequence, TypeVar

from domain.models.session import WorkoutSession


class SetLike(Protocol):
    reps: int
    weight: float


S = TypeVar("S", bound=SetLike)


class InvalidSetError(ValueError):
    """A set with negative reps or weight was passed to a volume calculation."""


def _check_set(set_entry: SetLike) -> None:
    if set_entry.reps < 0 or set_entry.weight < 0:
        raise InvalidSetError(
            f"reps and weight must be non-negative (got reps={set_entry.reps}, weight={set_entry.weight})"
        )


def set_volume(set_entry: SetLike) -> float:
    """
    Volume of a single set.

    Raises:
        InvalidSetError: if reps or weight is negative
    """
    _check_set(set_entry)
    return set_entry.reps * set_entry.weight


def exercise_volume(sets: Iterable[SetLike]) -> float:
    """Sum of set volumes; 0 for no sets."""
    return sum((set_volume(s) for s in sets), 0)


def session_volume(session: WorkoutSession) -> float:
    return sum((exercise_volume(e.sets) for e in session.exercises), 0)


def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))


def estimated_1rm(weight: float, reps: int) -> float:
    """
    Estimate a one-rep max with the Epley formula.

    Formula: 1RM = weight * (1 + reps/30), rounded to the nearest whole unit.

    Examples:
        >>> estimated_1rm(100, 10)
        133.0
        >>> estimated_1rm(225, 1)
        225
        >>> estimated_1rm(100, 0)
        0
    """
    if reps <= 0 or weight <= 0:
        return 0
    if reps == 1:
        return weight
    return _round_half_up(weight * (1 + reps / 30))


def best_set(sets: Sequence[S]) -> Optional[S]:
    """
    The set with the highest estimated 1RM.

    The first set wins an exact tie. Returns None for no sets.
    """
    best: Optional[S] = None
    best_1rm = 0.0
    for candidate in sets:
        candidate_1rm = estimated_1rm(candidate.weight, candidate.reps)
        if best is None or candidate_1rm > best_1rm:
            best = candidate
            best_1rm = candidate_1rm
    return best
