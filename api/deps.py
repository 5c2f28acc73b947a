"""
FastAPI Dependency Providers for the Training Dashboard API.

This module provides FastAPI dependency injection functions that return
interface types (Protocols) rather than concrete implementations. This
enables clean separation of concerns and easy testing with in-memory fakes.

Architecture:
- Settings and Supabase client are cached per-process (lru_cache)
- Repository and service providers create new instances per-request

Usage in routers:
    from api.deps import get_dashboard_service
    from backend.core.dashboard_service import DashboardService

    @router.get("/users/{user_id}/dashboard")
    def read_dashboard(
        user_id: str,
        service: DashboardService = Depends(get_dashboard_service),
    ):
        return service.get_dashboard_summary(user_id)

Testing:
    # Override dependencies in tests
    app.dependency_overrides[get_session_repo] = lambda: FakeSessionRepository()
"""

from datetime import tzinfo
from functools import lru_cache
from typing import Optional

from fastapi import Depends, HTTPException
from supabase import Client, create_client

# Protocol types (interfaces)
from application.ports import SessionRepository, SnapshotRepository

# Concrete implementations
from infrastructure import SupabaseSessionRepository, SupabaseSnapshotRepository

from backend.core.dashboard_service import DashboardService
from backend.core.dates import resolve_timezone
from backend.core.progression_service import ProgressionService
from backend.settings import Settings, get_settings as _get_settings


# =============================================================================
# Settings Provider
# =============================================================================


def get_settings() -> Settings:
    """
    Get application settings.

    Returns cached Settings instance from backend.settings.
    Use this as a FastAPI dependency for settings access.

    Returns:
        Settings: Application settings instance
    """
    return _get_settings()


def get_timezone(settings: Settings = Depends(get_settings)) -> tzinfo:
    """Timezone that defines calendar days for streaks and period buckets."""
    return resolve_timezone(settings.default_timezone)


# =============================================================================
# Supabase Client Provider
# =============================================================================


@lru_cache
def get_supabase_client() -> Optional[Client]:
    """
    Get Supabase client instance (cached).

    Creates a Supabase client using credentials from settings.
    Returns None if credentials are not configured.

    Returns:
        Client: Supabase client instance, or None if not configured
    """
    settings = _get_settings()

    if not settings.supabase_url or not settings.supabase_key:
        return None

    return create_client(settings.supabase_url, settings.supabase_key)


def get_supabase_client_required() -> Client:
    """
    Get Supabase client instance, raising if not configured.

    Use this dependency when the endpoint requires database access.

    Returns:
        Client: Supabase client instance

    Raises:
        HTTPException: 503 if Supabase is not configured
    """
    client = get_supabase_client()
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Database not available. Supabase credentials not configured.",
        )
    return client


# =============================================================================
# Repository Providers
# =============================================================================


def get_session_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> SessionRepository:
    """
    Get SessionRepository implementation.

    Returns a SupabaseSessionRepository instance with injected client.
    The return type is the Protocol to enable easy mocking.

    Args:
        client: Supabase client (injected)
        settings: Settings naming the sessions table (injected)

    Returns:
        SessionRepository: Read access to completed workout sessions
    """
    return SupabaseSessionRepository(client, table=settings.sessions_table)


def get_snapshot_repo(
    client: Client = Depends(get_supabase_client_required),
    settings: Settings = Depends(get_settings),
) -> SnapshotRepository:
    """
    Get SnapshotRepository implementation.

    Args:
        client: Supabase client (injected)
        settings: Settings naming the snapshots table (injected)

    Returns:
        SnapshotRepository: Per-user dashboard snapshot store
    """
    return SupabaseSnapshotRepository(client, table=settings.snapshots_table)


# =============================================================================
# Service Providers
# =============================================================================


def get_dashboard_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    snapshot_repo: SnapshotRepository = Depends(get_snapshot_repo),
    tz: tzinfo = Depends(get_timezone),
) -> DashboardService:
    """Get DashboardService wired to the injected repositories."""
    return DashboardService(session_repo, snapshot_repo, tz=tz)


def get_progression_service(
    session_repo: SessionRepository = Depends(get_session_repo),
    tz: tzinfo = Depends(get_timezone),
) -> ProgressionService:
    """Get ProgressionService wired to the injected session repository."""
    return ProgressionService(session_repo, tz=tz)
