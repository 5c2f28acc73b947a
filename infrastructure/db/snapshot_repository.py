"""
Supabase Snapshot Repository Implementation.

Table schema (dashboard_snapshots):
- user_id: Primary key, one row per user
- snapshot: JSONB DashboardSnapshot
- last_updated: Copied from the snapshot for operator queries
"""
from typing import Optional, Dict, Any
import logging

from supabase import Client

from application.ports.exceptions import RepositoryUnavailableError

logger = logging.getLogger(__name__)


class SupabaseSnapshotRepository:
    """
    Supabase implementation of SnapshotRepository.
    """

    def __init__(self, client: Client, table: str = "dashboard_snapshots"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
            table: Name of the snapshots table
        """
        self._client = client
        self._table = table

    def get(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Read the user's snapshot, or None if none has been written."""
        try:
            result = self._client.table(self._table) \
                .select("snapshot") \
                .eq("user_id", user_id) \
                .limit(1) \
                .execute()
        except Exception as e:
            logger.exception(f"Error reading snapshot for user {user_id}: {e}")
            raise RepositoryUnavailableError(f"Snapshot store unavailable: {e}") from e

        if not result.data:
            return None
        return result.data[0].get("snapshot")

    def save(self, user_id: str, snapshot: Dict[str, Any]) -> bool:
        """Upsert the user's snapshot row."""
        try:
            result = self._client.table(self._table).upsert({
                "user_id": user_id,
                "snapshot": snapshot,
                "last_updated": snapshot.get("last_updated"),
            }, on_conflict="user_id").execute()
        except Exception as e:
            logger.exception(f"Error saving snapshot for user {user_id}: {e}")
            raise RepositoryUnavailableError(f"Snapshot store unavailable: {e}") from e

        if result.data:
            return True
        logger.warning(f"No data returned from snapshot upsert for user {user_id}")
        return False
