"""
Dashboard Service.

Thin drivers around build_dashboard_snapshot:

- recompute_snapshot: eager mode. Re-read every completed session, rebuild
  the snapshot and persist it. Called on every session write and by the CLI.
- handle_session_event: the write trigger. Never raises, because a failed
  recompute must not block the session write that caused it.
- get_dashboard_summary: lazy mode. Return whatever snapshot is stored, or
  the empty snapshot. May be stale until the next write.

Overlapping recomputes for the same user are tolerated: each one rebuilds
from the full session list, so the last writer converges on the right answer.
"""
from typing import Optional
from dataclasses import dataclass
from datetime import datetime, tzinfo
import logging

from pydantic import ValidationError

from application.ports.exceptions import RepositoryUnavailableError
from application.ports.session_repository import SessionRepository
from application.ports.snapshot_repository import SnapshotRepository
from backend.core.dashboard import build_dashboard_snapshot, empty_snapshot
from backend.core.dates import resolve_now, resolve_timezone
from domain.models import DashboardSnapshot

logger = logging.getLogger(__name__)


@dataclass
class SessionEvent:
    """A create/update/delete of one of the user's sessions."""
    user_id: str
    event_type: str = "UPDATE"  # INSERT, UPDATE, DELETE
    session_id: Optional[str] = None


class DashboardService:
    """Builds, stores and serves per-user dashboard snapshots."""

    def __init__(
        self,
        session_repo: SessionRepository,
        snapshot_repo: SnapshotRepository,
        *,
        tz: Optional[tzinfo] = None,
    ):
        """
        Initialize the dashboard service.

        Args:
            session_repo: Source of completed sessions
            snapshot_repo: Store for the derived snapshot
            tz: Timezone defining calendar days for streaks and windows
        """
        self._session_repo = session_repo
        self._snapshot_repo = snapshot_repo
        self._tz = tz or resolve_timezone(None)

    def recompute_snapshot(self, user_id: str, now: Optional[datetime] = None) -> DashboardSnapshot:
        """
        Rebuild the user's snapshot from scratch and persist it.

        Raises:
            RepositoryUnavailableError: if sessions cannot be read or the
                snapshot write fails or is not acknowledged
        """
        now = resolve_now(now, self._tz)
        sessions = self._session_repo.list_completed_sessions(user_id)
        snapshot = build_dashboard_snapshot(sessions, now=now, tz=self._tz)

        if not self._snapshot_repo.save(user_id, snapshot.model_dump(mode="json")):
            raise RepositoryUnavailableError(f"Snapshot write for user {user_id} was not acknowledged")

        logger.info(
            f"Recomputed dashboard for user {user_id}: "
            f"{snapshot.total_workouts} workouts, streak {snapshot.current_streak}"
        )
        return snapshot

    def handle_session_event(self, event: SessionEvent, now: Optional[datetime] = None) -> bool:
        """
        React to a session write by recomputing the owner's snapshot.

        The event payload is not trusted as a diff; the full session list is
        re-read.

        Returns:
            True if the snapshot was rebuilt and stored, False otherwise
        """
        if not event.user_id:
            logger.warning(f"Ignoring session event without user_id (session {event.session_id})")
            return False

        try:
            self.recompute_snapshot(event.user_id, now=now)
            return True
        except Exception as e:
            logger.exception(
                f"Dashboard recompute failed for user {event.user_id} "
                f"after {event.event_type} of session {event.session_id}: {e}"
            )
            return False

    def get_dashboard_summary(self, user_id: str) -> DashboardSnapshot:
        """
        Read the stored snapshot without recomputing.

        Returns the empty snapshot if none is stored or the store fails.
        """
        try:
            stored = self._snapshot_repo.get(user_id)
        except RepositoryUnavailableError as e:
            logger.error(f"Returning empty dashboard for user {user_id}: {e}")
            return empty_snapshot()

        if stored is None:
            return empty_snapshot()

        try:
            return DashboardSnapshot.model_validate(stored)
        except ValidationError as e:
            logger.error(f"Stored dashboard for user {user_id} is unreadable: {e}")
            return empty_snapshot()

    def get_or_compute_summary(self, user_id: str, now: Optional[datetime] = None) -> DashboardSnapshot:
        """Lazy read that falls back to an eager recompute when nothing usable is stored."""
        stored = self._snapshot_repo.get(user_id)
        if stored is not None:
            try:
                return DashboardSnapshot.model_validate(stored)
            except ValidationError as e:
                logger.error(f"Stored dashboard for user {user_id} is unreadable, rebuilding: {e}")
        else:
            logger.info(f"No dashboard stored for user {user_id}; computing")
        return self.recompute_snapshot(user_id, now=now)
