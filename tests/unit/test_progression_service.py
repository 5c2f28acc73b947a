"""
Unit tests for Progression Service.

Tests cover:
- Exercise history ordering, limits and per-session metrics
- All-time stats and personal record selection
- Last performed lookup
- Volume by ISO week and calendar month
"""
import pytest
from datetime import date, datetime
from zoneinfo import ZoneInfo

from backend.core.progression_service import ProgressionService, build_history_entry
from domain.converters import db_row_to_session
from domain.models import ExerciseStats
from tests.fakes import FakeSessionRepository, make_exercise, make_session_doc, make_set

UTC = ZoneInfo("UTC")
USER = "test_user"


@pytest.fixture
def session_repo():
    """Bench press on three dates, squat on one."""
    repo = FakeSessionRepository()
    repo.seed(USER, [
        make_session_doc("2025-01-06", [
            make_exercise("bench", "Bench Press", [
                make_set(8, 185, 1),
                make_set(7, 185, 2),
            ]),
        ], session_id="s1"),
        make_session_doc("2025-01-13", [
            make_exercise("squat", "Squat", [make_set(5, 275, 1)]),
            make_exercise("bench", "Bench Press", [
                make_set(5, 205, 1),
                make_set(5, 205, 2),
            ]),
        ], session_id="s2"),
        make_session_doc("2025-02-03", [
            make_exercise("bench", "Bench Press", [make_set(10, 165, 1)]),
        ], session_id="s3"),
        make_session_doc("2025-02-10", [
            make_exercise("bench", "Bench Press", [make_set(10, 500, 1)]),
        ], session_id="draft", status="in_progress"),
    ])
    return repo


@pytest.fixture
def service(session_repo):
    return ProgressionService(session_repo, tz=UTC)


@pytest.mark.unit
class TestExerciseHistory:
    """Tests for get_exercise_history()."""

    def test_most_recent_first(self, service):
        """Completed sessions only, newest first."""
        history = service.get_exercise_history(USER, "bench")
        assert [h.session_id for h in history] == ["s3", "s2", "s1"]

    def test_entry_metrics(self, service):
        """Each entry carries volume, reps, best set and its 1RM."""
        entry = service.get_exercise_history(USER, "bench")[1]
        assert entry.exercise_name == "Bench Press"
        assert entry.total_volume == 2050
        assert entry.total_reps == 10
        assert entry.best_set.set_number == 1
        # 205 * (1 + 5/30) = 239.2
        assert entry.estimated_1rm == 239

    def test_limit(self, service):
        """The limit stops the scan early."""
        history = service.get_exercise_history(USER, "bench", limit=2)
        assert [h.session_id for h in history] == ["s3", "s2"]

    def test_unknown_exercise_is_empty(self, service):
        """An exercise never performed has no history."""
        assert service.get_exercise_history(USER, "deadlift") == []

    def test_first_matching_entry_per_session(self):
        """A session listing an exercise twice contributes its first entry only."""
        session = db_row_to_session(make_session_doc("2025-01-06", [
            make_exercise("bench", "Bench Press", [make_set(5, 100)]),
            make_exercise("bench", "Bench Press", [make_set(5, 300)]),
        ]))
        entry = build_history_entry(session, "bench")
        assert entry.total_volume == 500

    def test_missing_name_reads_unknown(self):
        """An entry without its descriptor is named "Unknown"."""
        session = db_row_to_session(make_session_doc("2025-01-06", [
            make_exercise("bench", None, [make_set(5, 100)]),
        ]))
        assert build_history_entry(session, "bench").exercise_name == "Unknown"

    def test_no_sets(self):
        """An entry without sets has no best set and zero 1RM."""
        session = db_row_to_session(make_session_doc("2025-01-06", [
            make_exercise("bench", "Bench Press", []),
        ]))
        entry = build_history_entry(session, "bench")
        assert entry.best_set is None
        assert entry.estimated_1rm == 0


@pytest.mark.unit
class TestExerciseStats:
    """Tests for get_exercise_stats()."""

    def test_stats(self, service):
        """PR comes from the session with the highest estimated 1RM."""
        stats = service.get_exercise_stats(USER, "bench")
        assert stats.exercise_name == "Bench Press"
        assert stats.total_sessions == 3
        assert stats.pr_weight == 205
        assert stats.pr_reps == 5
        assert stats.pr_date == datetime(2025, 1, 13)
        assert stats.estimated_1rm == 239
        assert stats.last_performed == datetime(2025, 2, 3)
        assert stats.total_volume == 2775 + 2050 + 1650

    def test_never_performed(self, service):
        """No history yields zeroed stats named Unknown."""
        assert service.get_exercise_stats(USER, "deadlift") == ExerciseStats(exercise_id="deadlift")

    def test_tie_keeps_more_recent_session(self):
        """Equal estimates: the first in most-recent-first order keeps the PR."""
        repo = FakeSessionRepository()
        repo.seed(USER, [
            make_session_doc("2025-01-01", [make_exercise("bench", "Bench", [make_set(10, 100)])]),
            make_session_doc("2025-01-08", [make_exercise("bench", "Bench", [make_set(1, 133)])]),
        ])
        stats = ProgressionService(repo, tz=UTC).get_exercise_stats(USER, "bench")
        assert stats.pr_date == datetime(2025, 1, 8)
        assert stats.pr_reps == 1


@pytest.mark.unit
class TestLastPerformed:
    """Tests for get_last_performed()."""

    def test_returns_most_recent(self, service):
        """The latest completed session is returned."""
        assert service.get_last_performed(USER, "bench").session_id == "s3"

    def test_none_when_never_performed(self, service):
        """No history means None."""
        assert service.get_last_performed(USER, "deadlift") is None


@pytest.mark.unit
class TestVolumeByPeriod:
    """Tests for get_volume_by_period()."""

    def test_weekly_buckets(self, service):
        """Buckets are ISO weeks in chronological order."""
        buckets = service.get_volume_by_period(USER, "week", date(2025, 1, 1), date(2025, 3, 1))
        assert [b.period for b in buckets] == ["2025-W02", "2025-W03", "2025-W06"]
        week3 = buckets[1]
        assert week3.session_count == 1
        assert week3.total_volume == 1375 + 2050
        assert week3.total_sets == 3
        assert week3.total_reps == 15

    def test_monthly_buckets(self, service):
        """Buckets are calendar months."""
        buckets = service.get_volume_by_period(USER, "month", date(2025, 1, 1), date(2025, 3, 1))
        assert [(b.period, b.session_count) for b in buckets] == [("2025-01", 2), ("2025-02", 1)]
        assert buckets[0].total_volume == 2775 + 1375 + 2050

    def test_range_is_inclusive_by_day(self, service):
        """A plain end date covers that whole day."""
        buckets = service.get_volume_by_period(USER, "month", date(2025, 1, 13), date(2025, 1, 13))
        assert [(b.period, b.session_count) for b in buckets] == [("2025-01", 1)]

    def test_default_range_is_current_year(self, service):
        """Without a range: Jan 1 of now's year up to now."""
        now = datetime(2025, 1, 20, 12, 0, tzinfo=UTC)
        buckets = service.get_volume_by_period(USER, "month", now=now)
        assert [(b.period, b.session_count) for b in buckets] == [("2025-01", 2)]

    def test_default_range_excludes_other_years(self, service):
        """A later year sees none of these sessions."""
        now = datetime(2026, 6, 1, tzinfo=UTC)
        assert service.get_volume_by_period(USER, "week", now=now) == []

    def test_iso_week_uses_iso_year(self):
        """Dec 30, 2024 belongs to 2025-W01."""
        repo = FakeSessionRepository()
        repo.seed(USER, [make_session_doc("2024-12-30", [make_exercise("bench", "Bench", [make_set(1, 100)])])])
        buckets = ProgressionService(repo, tz=UTC).get_volume_by_period(
            USER, "week", date(2024, 12, 1), date(2025, 1, 31)
        )
        assert [b.period for b in buckets] == ["2025-W01"]

    def test_invalid_period(self, service):
        """Only week and month are accepted."""
        with pytest.raises(ValueError):
            service.get_volume_by_period(USER, "day")
