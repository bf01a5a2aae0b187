from datetime import datetime, timedelta, timezone

import pytest

from devprofile_scoring.scoring import ScoreCalculator
from devprofile_scoring.service import SessionService
from helpers.memory_store import InMemorySessionStore


class TickingClock:
    """Deterministic clock: each call returns one second later than the last."""

    def __init__(self, start=None):
        self.current = start or datetime(2024, 10, 15, 9, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture
def calculator():
    return ScoreCalculator()


@pytest.fixture
def memory_store():
    """Fresh in-memory store for each test."""
    return InMemorySessionStore()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def service(memory_store, clock):
    """SessionService wired to the in-memory store and a ticking clock."""
    return SessionService(memory_store, now=clock)
