"""
Dashboard router.

This router provides endpoints for:
- Reading the stored dashboard snapshot (lazy, may be stale)
- Forcing an eager recompute of the snapshot
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from api.deps import get_dashboard_service
from application.ports.exceptions import RepositoryUnavailableError
from backend.core.dashboard_service import DashboardService
from domain.models import DashboardSnapshot, WeightUnit, to_display_weight

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/dashboard",
    tags=["Dashboard"],
)


# =============================================================================
# Response Models
# =============================================================================


class DashboardResponse(DashboardSnapshot):
    """Dashboard snapshot with volumes expressed in ``unit``."""
    unit: WeightUnit = "lb"


def _to_response(snapshot: DashboardSnapshot, unit: WeightUnit) -> DashboardResponse:
    data = snapshot.model_dump()
    for name in ("total_volume", "weekly_volume", "monthly_volume"):
        data[name] = to_display_weight(data[name], unit)
    return DashboardResponse(**data, unit=unit)


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=DashboardResponse)
def get_dashboard(
    user_id: str = Path(..., min_length=1, description="Owner of the dashboard"),
    unit: WeightUnit = Query("lb", description="Unit for volume figures"),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Get the stored dashboard summary.

    Returns the all-zero dashboard when nothing has been computed yet or the
    snapshot store is unavailable.
    """
    return _to_response(service.get_dashboard_summary(user_id), unit)


@router.post("/recompute", response_model=DashboardResponse)
def recompute_dashboard(
    user_id: str = Path(..., min_length=1, description="Owner of the dashboard"),
    unit: WeightUnit = Query("lb", description="Unit for volume figures"),
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Rebuild the dashboard from every completed session and store it.
    """
    try:
        snapshot = service.recompute_snapshot(user_id)
    except RepositoryUnavailableError as e:
        logger.error(f"Recompute failed for user {user_id}: {e}")
        raise HTTPException(
            status_code=503,
            detail="Session or snapshot store unavailable. Try again later.",
        )
    return _to_response(snapshot, unit)
