"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository
interfaces defined in application.ports. These implementations can be
injected into services and routers for clean separation of concerns and
testability.

Usage:
    from supabase import create_client
    from infrastructure.db import (
        SupabaseSessionRepository,
        SupabaseSnapshotRepository,
    )

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repositories with injected client
    session_repo = SupabaseSessionRepository(client)
    snapshot_repo = SupabaseSnapshotRepository(client)
"""

from infrastructure.db.session_repository import SupabaseSessionRepository
from infrastructure.db.snapshot_repository import SupabaseSnapshotRepository

__all__ = [
    # Session reads
    "SupabaseSessionRepository",

    # Dashboard snapshots
    "SupabaseSnapshotRepository",
]
