from __future__ import annotations

import pytest

import mycircle.db as db_module
from mycircle.db import init_db
from mycircle.services import build_services

NOW = 1_700_000_000
DAY = 86400


class FakeClock:
    def __init__(self, now: int = NOW) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, days: float) -> None:
        self.now += int(days * DAY)


@pytest.fixture
def use_temp_db(tmp_path, monkeypatch):
    """Use a temporary database for each test."""
    test_db = tmp_path / "test.db"
    monkeypatch.setattr(db_module, "DB_PATH", test_db)
    monkeypatch.delenv("MYCIRCLE_DB_PATH", raising=False)
    init_db(test_db)
    return test_db


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def services(use_temp_db, clock):
    return build_services(use_temp_db, clock)
