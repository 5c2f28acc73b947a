"""
Integration tests for Progression API endpoints.

Tests cover:
- Exercise stats endpoint
- Exercise history endpoint
- Last performed endpoint
- Volume by period endpoint
- Unit conversion, validation and store failures
"""
import pytest
from datetime import date
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeSessionRepository, make_exercise, make_session_doc, make_set
from tests.fakes.conftest import override_repositories, reset_overrides

USER = "test_user"


# =============================================================================
# Test Fixtures
# =============================================================================


@pytest.fixture
def session_repo():
    """Create a fake session repository with bench and squat sessions."""
    repo = FakeSessionRepository()
    repo.seed(USER, [
        make_session_doc("2025-01-06", [
            make_exercise("barbell-bench-press", "Barbell Bench Press", [
                make_set(8, 185, 1),
                make_set(7, 185, 2),
            ]),
        ], session_id="s1", name="Push Day"),
        make_session_doc("2025-01-13", [
            make_exercise("barbell-squat", "Barbell Squat", [make_set(5, 275, 1)]),
            make_exercise("barbell-bench-press", "Barbell Bench Press", [
                make_set(5, 205, 1),
                make_set(5, 205, 2),
            ]),
        ], session_id="s2", name="Full Body"),
        make_session_doc("2025-02-03", [
            make_exercise("barbell-bench-press", "Barbell Bench Press", [make_set(10, 165, 1)]),
        ], session_id="s3", name="Push Day"),
    ])
    return repo


@pytest.fixture
def app(session_repo):
    """Create the app with the session store replaced by the fake."""
    application = create_app(settings=Settings(environment="test", _env_file=None))
    override_repositories(
        application,
        settings=Settings(environment="test", default_timezone="UTC", _env_file=None),
        sessions=session_repo,
    )
    yield application
    reset_overrides(application)


@pytest.fixture
def client(app):
    return TestClient(app)


# =============================================================================
# Exercise Stats
# =============================================================================


@pytest.mark.integration
class TestExerciseStatsEndpoint:
    """Tests for GET /users/{user_id}/exercises/{exercise_id}/stats."""

    def test_stats(self, client):
        """Stats report the PR, session count and total volume."""
        response = client.get(f"/users/{USER}/exercises/barbell-bench-press/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["exercise_name"] == "Barbell Bench Press"
        assert data["unit"] == "lb"
        assert data["total_sessions"] == 3
        assert data["pr_weight"] == 205
        assert data["pr_reps"] == 5
        assert data["estimated_1rm"] == 239
        assert data["pr_date"].startswith("2025-01-13")
        assert data["last_performed"].startswith("2025-02-03")
        assert data["total_volume"] == 6475

    def test_stats_in_kg(self, client):
        """unit=kg converts weights for display."""
        response = client.get(
            f"/users/{USER}/exercises/barbell-bench-press/stats",
            params={"unit": "kg"},
        )

        data = response.json()
        assert data["unit"] == "kg"
        assert data["pr_weight"] == 93.0
        assert data["estimated_1rm"] == 108.4
        assert data["pr_reps"] == 5

    def test_never_performed(self, client):
        """An exercise with no history returns zeroed stats."""
        response = client.get(f"/users/{USER}/exercises/deadlift/stats")

        assert response.status_code == 200
        data = response.json()
        assert data["exercise_name"] == "Unknown"
        assert data["total_sessions"] == 0
        assert data["pr_date"] is None

    def test_invalid_exercise_id(self, client):
        """Exercise IDs with unsupported characters are rejected."""
        response = client.get(f"/users/{USER}/exercises/bench%20press!/stats")
        assert response.status_code == 400

    def test_unknown_unit(self, client):
        """Units other than lb/kg fail validation."""
        response = client.get(
            f"/users/{USER}/exercises/barbell-bench-press/stats",
            params={"unit": "stone"},
        )
        assert response.status_code == 422

    def test_store_unavailable(self, client, session_repo):
        """An unreachable session store surfaces as 503."""
        session_repo.set_unavailable()
        response = client.get(f"/users/{USER}/exercises/barbell-bench-press/stats")
        assert response.status_code == 503


# =============================================================================
# Exercise History
# =============================================================================


@pytest.mark.integration
class TestExerciseHistoryEndpoint:
    """Tests for GET /users/{user_id}/exercises/{exercise_id}/history."""

    def test_history(self, client):
        """History is newest first with per-session metrics."""
        response = client.get(f"/users/{USER}/exercises/barbell-bench-press/history")

        assert response.status_code == 200
        data = response.json()
        assert data["exercise_id"] == "barbell-bench-press"
        assert data["total"] == 3
        assert [s["session_id"] for s in data["sessions"]] == ["s3", "s2", "s1"]

        oldest = data["sessions"][2]
        assert oldest["total_volume"] == 2775
        assert oldest["total_reps"] == 15
        assert oldest["best_set"]["weight"] == 185
        assert oldest["best_set"]["reps"] == 8
        assert [s["set_number"] for s in oldest["sets"]] == [1, 2]

    def test_history_limit(self, client):
        """limit caps the number of sessions returned."""
        response = client.get(
            f"/users/{USER}/exercises/barbell-bench-press/history",
            params={"limit": 1},
        )

        data = response.json()
        assert data["total"] == 1
        assert data["sessions"][0]["session_id"] == "s3"

    @pytest.mark.parametrize("limit", [0, 501])
    def test_history_limit_bounds(self, client, limit):
        """limit must be between 1 and 500."""
        response = client.get(
            f"/users/{USER}/exercises/barbell-bench-press/history",
            params={"limit": limit},
        )
        assert response.status_code == 422

    def test_history_empty(self, client):
        """An exercise never performed has an empty history."""
        response = client.get(f"/users/{USER}/exercises/deadlift/history")

        assert response.status_code == 200
        assert response.json()["sessions"] == []
        assert response.json()["total"] == 0

    def test_other_user_sees_nothing(self, client):
        """History is scoped to the user in the path."""
        response = client.get("/users/someone-else/exercises/barbell-bench-press/history")
        assert response.json()["total"] == 0


# =============================================================================
# Last Performed
# =============================================================================


@pytest.mark.integration
class TestLastPerformedEndpoint:
    """Tests for GET /users/{user_id}/exercises/{exercise_id}/last."""

    def test_last_performed(self, client):
        """The most recent session is returned."""
        response = client.get(f"/users/{USER}/exercises/barbell-bench-press/last")

        assert response.status_code == 200
        data = response.json()
        assert data["session_id"] == "s3"
        assert data["sets"][0]["weight"] == 165

    def test_last_performed_not_found(self, client):
        """404 when the exercise was never performed."""
        response = client.get(f"/users/{USER}/exercises/deadlift/last")
        assert response.status_code == 404


# =============================================================================
# Volume by Period
# =============================================================================


@pytest.mark.integration
class TestVolumeEndpoint:
    """Tests for GET /users/{user_id}/volume."""

    def test_weekly_volume(self, client):
        """Weekly buckets use ISO week keys."""
        response = client.get(
            f"/users/{USER}/volume",
            params={"period": "week", "start_date": "2025-01-01", "end_date": "2025-03-01"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "week"
        assert [b["period"] for b in data["data"]] == ["2025-W02", "2025-W03", "2025-W06"]
        assert data["data"][1]["total_volume"] == 3425
        assert data["data"][1]["total_sets"] == 3

    def test_monthly_volume(self, client):
        """Monthly buckets use YYYY-MM keys."""
        response = client.get(
            f"/users/{USER}/volume",
            params={"period": "month", "start_date": "2025-01-01", "end_date": "2025-03-01"},
        )

        data = response.json()
        assert [(b["period"], b["session_count"]) for b in data["data"]] == [
            ("2025-01", 2),
            ("2025-02", 1),
        ]

    def test_volume_in_kg(self, client):
        """unit=kg converts bucket volume."""
        response = client.get(
            f"/users/{USER}/volume",
            params={"period": "month", "start_date": "2025-02-01", "end_date": "2025-02-28", "unit": "kg"},
        )

        data = response.json()
        assert data["unit"] == "kg"
        assert data["data"][0]["total_volume"] == 748.4

    def test_invalid_period(self, client):
        """Only week and month are accepted."""
        response = client.get(f"/users/{USER}/volume", params={"period": "day"})
        assert response.status_code == 422

    def test_start_after_end(self, client):
        """An inverted range is rejected."""
        response = client.get(
            f"/users/{USER}/volume",
            params={"start_date": "2025-03-01", "end_date": "2025-01-01"},
        )
        assert response.status_code == 400

    def test_range_limits_buckets(self, client):
        """Sessions outside the date range are left out."""
        response = client.get(
            f"/users/{USER}/volume",
            params={"start_date": str(date(2025, 1, 10)), "end_date": str(date(2025, 1, 20))},
        )
        assert [b["period"] for b in response.json()["data"]] == ["2025-W03"]

    def test_store_unavailable(self, client, session_repo):
        """An unreachable session store surfaces as 503."""
        session_repo.set_unavailable()
        response = client.get(f"/users/{USER}/volume", params={"period": "week"})
        assert response.status_code == 503
