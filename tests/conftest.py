# Shared test fixtures: a LogStore on tmp_path with a controllable clock,
# and a TestClient around an app bound to that store.

from datetime import date

import pytest
from fastapi.testclient import TestClient

from runtime.api.server import create_app
from runtime.store.log_store import LogStore


class FakeClock:
    """Stands in for date.today; tests move it between days."""

    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture
def clock():
    return FakeClock(date(2024, 1, 1))


@pytest.fixture
def store(tmp_path, clock):
    return LogStore(store_root=tmp_path / "logs", clock=clock)


@pytest.fixture
def test_app(store):
    return TestClient(create_app(store=store))
