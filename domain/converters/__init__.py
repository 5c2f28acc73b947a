"""
Domain converters between stored documents and domain models.

- db_row_to_session: Database row (from Supabase) -> WorkoutSession (lenient)
- session_to_db_row: WorkoutSession -> Database row (for persistence)

All converters are pure functions with no side effects.
"""

from domain.converters.db_converters import (
    db_row_to_session,
    parse_datetime,
    session_to_db_row,
)

__all__ = [
    "db_row_to_session",
    "session_to_db_row",
    "parse_datetime",
]
