"""Test fixtures for performance-service."""

import itertools
import os

import pytest

os.environ["LOG_FORMAT"] = "text"
os.environ["MAX_REQUEST_BODY_BYTES"] = "65536"
os.environ["PERF_STORE_CAPACITY"] = "1000"

from fastapi.testclient import TestClient

from app.api.deps import get_clock
from app.main import app

BASE_TS = 1_760_000_000_000  # ms since epoch, October 2025


class StepClock:
    """Deterministic clock: every call advances by ``step_ms``."""

    def __init__(self, start: int = BASE_TS, step_ms: int = 1000):
        self._ticks = itertools.count(start, step_ms)
        self.last: int | None = None

    def __call__(self) -> int:
        self.last = next(self._ticks)
        return self.last


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def client(clock):
    """Fresh application lifespan (hence a fresh sample store) per test."""
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def store(client):
    return app.state.sample_store
