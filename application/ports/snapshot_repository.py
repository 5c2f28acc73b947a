"""
Snapshot Repository Interface (Port).

One persisted dashboard snapshot per user. The snapshot is derived data and
is written by the aggregation pipeline only; there is no compare-and-swap,
the last writer wins.
"""
from typing import Protocol, Optional, Dict, Any


class SnapshotRepository(Protocol):
    """Abstract interface for the per-user dashboard snapshot record."""

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Read the stored snapshot.

        Returns:
            Snapshot dict, or None if the user has no snapshot yet

        Raises:
            RepositoryUnavailableError: if the store cannot be read
        """
        ...

    def save(self, user_id: str, snapshot: Dict[str, Any]) -> bool:
        """
        Create or replace the user's snapshot.

        Args:
            user_id: Owner of the snapshot
            snapshot: JSON-compatible snapshot dict

        Returns:
            True if the store acknowledged the write

        Raises:
            RepositoryUnavailableError: if the store cannot be written
        """
        ...
