"""
Pytest configuration and fixtures for Encore tests.
"""

import os
from datetime import datetime, timedelta

import pytest

# Keep tests away from any developer .env / home-directory store
os.environ["ENCORE_ENV"] = "development"
os.environ.setdefault("ENCORE_LOG_LEVEL", "WARNING")

from encore.storage import InMemoryStore
from encore.tracking import EventTracker, MemorySink
from onboarding import OnboardingStateMachine


class FakeClock:
    """Settable clock; call it to read the time."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    """Clock fixed at 10:00 on a known day."""
    return FakeClock(datetime(2024, 12, 19, 10, 0, 0))


@pytest.fixture
def store():
    return InMemoryStore()


@pytest.fixture
def sink():
    return MemorySink()


@pytest.fixture
def tracker(store, sink, clock):
    return EventTracker(store, sinks=[sink], clock=clock, platform="test", app_version="9.9.9")


@pytest.fixture
def machine(tracker):
    return OnboardingStateMachine(tracker)


@pytest.fixture
def filled_machine(machine):
    """Machine walked to the ARTISTS step with valid answers."""
    machine.update(email="user@example.com")
    machine.advance()
    machine.update(password="hunter22!")
    machine.advance()
    machine.update(age="27")
    machine.advance()
    machine.update(name="Sam")
    machine.advance()
    return machine
