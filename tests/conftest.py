"""Shared fixtures for braze_export tests."""

import time
from collections.abc import Callable, Iterator
from datetime import UTC, datetime
from typing import Any

import pytest


@pytest.fixture
def local_tz(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[[str], None]]:
    """Switch the process-local timezone (POSIX TZ string) for one test."""

    def _set(tz: str) -> None:
        monkeypatch.setenv("TZ", tz)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()


@pytest.fixture
def account_created_event() -> dict[str, Any]:
    return {
        "uuid": "018feea0-b4ac-7ccf-8da6-604066675d32",
        "event": "account created",
        "timestamp": datetime(2023, 6, 16, tzinfo=UTC),
        "properties": {
            "$set": {
                "email": "test@posthog",
                "name": "Test User",
            },
            "is_a_demo_user": True,
        },
        "distinct_id": "test",
        "team_id": 0,
    }
