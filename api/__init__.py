"""
API package for the Training Dashboard API.

This package contains:
- deps.py: FastAPI dependency providers for DI
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_timezone,
    get_supabase_client,
    get_supabase_client_required,
    get_session_repo,
    get_snapshot_repo,
    get_dashboard_service,
    get_progression_service,
)

__all__ = [
    # Settings
    "get_settings",
    "get_timezone",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_session_repo",
    "get_snapshot_repo",
    # Services
    "get_dashboard_service",
    "get_progression_service",
]
