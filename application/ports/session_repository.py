"""
Session Repository Interface (Port).

This module defines the read contract the aggregation code needs from the
workout session store. Session writes belong to the tracking clients, so the
port is read-only.
"""
from typing import Protocol, Optional, List, Dict, Any
from datetime import date


class SessionRepository(Protocol):
    """
    Abstract interface for reading a user's workout sessions.

    Implementations return stored documents (dicts) rather than validated
    models; documents are read leniently by domain.converters.
    """

    def list_completed_sessions(
        self,
        user_id: str,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """
        List the user's completed sessions, most recent first.

        Only sessions with status ``completed`` are returned. Without a date
        range the full history is returned (no pagination).

        Args:
            user_id: Owner of the sessions
            start_date: Earliest session_date to include (inclusive)
            end_date: Latest session_date to include (inclusive)

        Returns:
            Session documents ordered by session_date descending

        Raises:
            RepositoryUnavailableError: if the store cannot be read
        """
        ...
