from __future__ import annotations

import sqlite3
import time
from contextlib import AbstractContextManager
from pathlib import Path
from typing import Callable

from mycircle.db import get_db

Clock = Callable[[], int]


def system_clock() -> int:
    return int(time.time())


class Store:
    """Shared plumbing for services backed by the SQLite database."""

    def __init__(self, db_path: Path | None = None, clock: Clock = system_clock) -> None:
        self.db_path = db_path
        self.clock = clock

    def _db(self) -> AbstractContextManager[sqlite3.Connection]:
        return get_db(self.db_path)
