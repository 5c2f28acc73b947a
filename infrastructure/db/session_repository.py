"""
Supabase Session Repository Implementation.

Reads completed workout sessions from the workout_sessions table. Each row
carries its exercise entries (with the copied exercise descriptor and the
logged sets) in the ``exercises`` JSONB column, so one query returns
everything the aggregation needs.
"""
from typing import Optional, List, Dict, Any
from datetime import date
import logging

from supabase import Client

from application.ports.exceptions import RepositoryUnavailableError
from domain.models import SessionStatus

logger = logging.getLogger(__name__)

SESSION_COLUMNS = (
    "id, user_id, name, type, template_id, session_date, status, "
    "exercises, started_at, completed_at, created_at, updated_at"
)


class SupabaseSessionRepository:
    """
    Supabase implementation of SessionRepository.
    """

    def __init__(self, client: Client, table: str = "workout_sessions"):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
            table: Name of the sessions table
        """
        self._client = client
        self._table = table

    def list_completed_sessions(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        List completed sessions, most recent first.

        Full scan without pagination; session counts are expected to stay in
        the hundreds per user.
        """
        try:
            query = self._client.table(self._table) \
                .select(SESSION_COLUMNS) \
                .eq("user_id", user_id) \
                .eq("status", SessionStatus.COMPLETED.value)

            if start_date:
                query = query.gte("session_date", start_date.isoformat())
            if end_date:
                query = query.lte("session_date", end_date.isoformat())

            result = query.order("session_date", desc=True).execute()
            return result.data or []
        except Exception as e:
            logger.exception(f"Error listing sessions for user {user_id}: {e}")
            raise RepositoryUnavailableError(f"Session store unavailable: {e}") from e
