"""
Router package for the Training Dashboard API.

This package contains all API routers organized by domain:
- health: Liveness and readiness checks
- dashboard: Stored dashboard summary and eager recompute
- progression: Exercise history, stats and volume by period
- webhooks: Session write trigger
"""

from api.routers.health import router as health_router
from api.routers.dashboard import router as dashboard_router
from api.routers.progression import router as progression_router
from api.routers.webhooks import router as webhooks_router

__all__ = [
    "health_router",
    "dashboard_router",
    "progression_router",
    "webhooks_router",
]
