"""
Command-line driver for dashboard snapshots.

Usage:
    python -m backend.cli recompute USER_ID [USER_ID ...]
    python -m backend.cli show USER_ID [--compute]

``recompute`` is the scheduled/backfill path: it rebuilds and stores each
user's snapshot exactly as the session webhook does.
"""
import argparse
import json
import logging
import sys

from supabase import create_client

from application.ports.exceptions import RepositoryUnavailableError
from backend.core.dashboard_service import DashboardService
from backend.core.dates import resolve_timezone
from backend.settings import Settings, get_settings
from infrastructure.db import SupabaseSessionRepository, SupabaseSnapshotRepository

logger = logging.getLogger(__name__)


def build_service(settings: Settings) -> DashboardService:
    """Wire a DashboardService against Supabase from settings."""
    if not settings.supabase_url or not settings.supabase_key:
        raise RuntimeError("SUPABASE_URL and a Supabase key must be configured")
    client = create_client(settings.supabase_url, settings.supabase_key)
    return DashboardService(
        SupabaseSessionRepository(client, table=settings.sessions_table),
        SupabaseSnapshotRepository(client, table=settings.snapshots_table),
        tz=resolve_timezone(settings.default_timezone),
    )


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Rebuild or inspect dashboard snapshots")
    subparsers = parser.add_subparsers(dest="command", required=True)

    recompute = subparsers.add_parser("recompute", help="Rebuild and store snapshots")
    recompute.add_argument("user_ids", nargs="+", metavar="USER_ID")

    show = subparsers.add_parser("show", help="Print the stored snapshot as JSON")
    show.add_argument("user_id", metavar="USER_ID")
    show.add_argument(
        "--compute",
        action="store_true",
        help="Compute and store the snapshot if none exists",
    )
    return parser


def run(args: argparse.Namespace, service: DashboardService) -> int:
    """Execute a parsed command. Returns the process exit code."""
    if args.command == "recompute":
        failures = 0
        for user_id in args.user_ids:
            try:
                snapshot = service.recompute_snapshot(user_id)
            except RepositoryUnavailableError as e:
                print(f"Error: {user_id}: {e}", file=sys.stderr)
                failures += 1
                continue
            print(f"{user_id}: {snapshot.total_workouts} workouts, "
                  f"current streak {snapshot.current_streak}")
        return 1 if failures else 0

    if args.command == "show":
        try:
            if args.compute:
                snapshot = service.get_or_compute_summary(args.user_id)
            else:
                snapshot = service.get_dashboard_summary(args.user_id)
        except RepositoryUnavailableError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(json.dumps(snapshot.model_dump(mode="json"), indent=2))
        return 0

    return 2


def main(argv=None):
    args = _parser().parse_args(argv)
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)

    try:
        service = build_service(settings)
    except RuntimeError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(run(args, service))


if __name__ == "__main__":
    main()
