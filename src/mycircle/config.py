from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = Path.home() / ".mycircle" / "mycircle.db"


@dataclass(frozen=True)
class Settings:
    # None falls back to mycircle.db.DB_PATH
    db_path: Path | None = None
    log_level: str = "INFO"
    recommendation_limit: int = 3


def load_settings() -> Settings:
    """Read settings from ``.env`` and ``MYCIRCLE_*`` environment variables."""
    load_dotenv()
    db_path = os.environ.get("MYCIRCLE_DB_PATH")
    return Settings(
        db_path=Path(db_path).expanduser() if db_path else None,
        log_level=os.environ.get("MYCIRCLE_LOG_LEVEL", "INFO").upper(),
        recommendation_limit=int(os.environ.get("MYCIRCLE_RECOMMENDATION_LIMIT", "3")),
    )
