"""
Repository Interfaces (Ports) for the Training Dashboard API.

This package defines abstract interfaces that decouple the aggregation
logic from infrastructure (database, external services). Implementations
are provided in the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the core needs)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import SessionRepository, SnapshotRepository

    class DashboardService:
        def __init__(self, sessions: SessionRepository, snapshots: SnapshotRepository):
            ...
"""

# Session reads
from application.ports.session_repository import SessionRepository

# Dashboard snapshot persistence
from application.ports.snapshot_repository import SnapshotRepository

from application.ports.exceptions import RepositoryUnavailableError

__all__ = [
    "SessionRepository",
    "SnapshotRepository",
    "RepositoryUnavailableError",
]
