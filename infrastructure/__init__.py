"""
Infrastructure Layer for the Training Dashboard API.

This package contains concrete implementations of repository interfaces:
- db/: Supabase database implementations
"""

# Re-export database repositories for convenient access
from infrastructure.db import (
    SupabaseSessionRepository,
    SupabaseSnapshotRepository,
)

__all__ = [
    "SupabaseSessionRepository",
    "SupabaseSnapshotRepository",
]
