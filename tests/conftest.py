"""
Pytest fixtures for the alert engine tests.
"""
from datetime import datetime, timedelta, timezone

import pytest

from app.services.alerts import Alerts
from app.services.event_store import EventStore


T0 = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)


class StepClock:
    """Deterministic clock: every call is one minute after the previous one."""

    def __init__(self, start: datetime = T0, step: timedelta = timedelta(minutes=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = current + self.step
        return current


def _report(**overrides):
    base = {
        "hazard_type": "tsunami",
        "severity": 5,
        "priority": "critical",
        "title": "Massive waves approaching Dwarka coast",
        "description": "Observed extremely high waves approaching the coastline.",
        "location": {"lat": 22.2394, "lng": 68.9685, "name": "Dwarka Beach, Gujarat"},
        "reporter": {"name": "Rajesh Patel", "phone": "+91 9876543210", "verified": True},
        "confidence": 85,
        "affected_people": 15000,
    }
    base.update(overrides)
    return base


@pytest.fixture
def report():
    """Factory for a valid submission dict; keyword args override fields."""
    return _report


@pytest.fixture
def clock() -> StepClock:
    return StepClock()


@pytest.fixture
def store(clock) -> EventStore:
    return EventStore(clock=clock, tracking_prefix="HR-", tracking_start=1)


@pytest.fixture
def alerts(store):
    svc = Alerts(store=store)
    yield svc
    svc.stop_feed()


@pytest.fixture
def client(alerts):
    from fastapi.testclient import TestClient

    from app.main import ALERTS_DEPENDENCIES, app, provide_alerts_service

    for dep in ALERTS_DEPENDENCIES:
        app.dependency_overrides[dep] = lambda: alerts
    try:
        yield TestClient(app)
    finally:
        for dep in ALERTS_DEPENDENCIES:
            app.dependency_overrides[dep] = provide_alerts_service
