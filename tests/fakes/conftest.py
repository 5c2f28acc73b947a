"""
Test Helpers for Overriding FastAPI Dependencies with Fakes.

Usage:
    from backend.main import create_app
    from tests.fakes.conftest import override_repositories

    app = create_app(settings=test_settings)
    sessions, snapshots = override_repositories(app)
    sessions.seed("user1", [...])
"""

from typing import Any, Callable, Optional, Tuple

from fastapi import FastAPI

from api import deps
from backend.settings import Settings
from tests.fakes.session_repository import FakeSessionRepository
from tests.fakes.snapshot_repository import FakeSnapshotRepository

# Type for dependency getters
RepoGetter = Callable[..., Any]


def override_dependency(app: FastAPI, getter: RepoGetter, implementation: Any) -> Any:
    """
    Override a FastAPI dependency with a fake implementation.

    Args:
        app: Application under test
        getter: The dependency getter function (e.g., get_session_repo)
        implementation: The fake implementation instance

    Returns:
        The implementation (for seeding data etc.)
    """
    app.dependency_overrides[getter] = lambda: implementation
    return implementation


def override_repositories(
    app: FastAPI,
    *,
    settings: Optional[Settings] = None,
    sessions: Optional[FakeSessionRepository] = None,
    snapshots: Optional[FakeSnapshotRepository] = None,
) -> Tuple[FakeSessionRepository, FakeSnapshotRepository]:
    """
    Point every repository dependency at in-memory fakes.

    Settings are overridden too when given, so table names, timezone and the
    webhook secret come from the test rather than the environment.
    """
    sessions = sessions or FakeSessionRepository()
    snapshots = snapshots or FakeSnapshotRepository()
    override_dependency(app, deps.get_session_repo, sessions)
    override_dependency(app, deps.get_snapshot_repo, snapshots)
    if settings is not None:
        override_dependency(app, deps.get_settings, settings)
    return sessions, snapshots


def reset_overrides(app: FastAPI) -> None:
    """Reset all FastAPI dependency overrides."""
    app.dependency_overrides.clear()
