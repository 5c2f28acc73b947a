"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- All fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports reset() for test isolation
- Can simulate an unavailable store

Usage:
    from tests.fakes import FakeSessionRepository, make_session_doc

    repo = FakeSessionRepository()
    repo.seed("user1", [make_session_doc("2025-01-06")])
"""

from tests.fakes.session_repository import (
    FakeSessionRepository,
    make_exercise,
    make_session_doc,
    make_set,
)
from tests.fakes.snapshot_repository import FakeSnapshotRepository

__all__ = [
    "FakeSessionRepository",
    "FakeSnapshotRepository",
    "make_exercise",
    "make_session_doc",
    "make_set",
]
