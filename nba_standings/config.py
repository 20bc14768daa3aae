from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SEASON_START_MONTH = 10


@dataclass(frozen=True)
class Settings:
    project_root: Path
    data_dir: Path
    db_path: Path
    api_base_url: str
    min_request_interval_seconds: float
    request_timeout_seconds: int
    season_start_month: int

    @staticmethod
    def from_env() -> "Settings":
        project_root = Path(__file__).resolve().parent.parent
        data_dir = project_root / "data"
        db_path = os.getenv("NBA_STANDINGS_DB_PATH")
        season_start_month = int(os.getenv("SEASON_START_MONTH", str(DEFAULT_SEASON_START_MONTH)))
        if not 1 <= season_start_month <= 12:
            raise ValueError(f"SEASON_START_MONTH must be between 1 and 12, got {season_start_month}")
        return Settings(
            project_root=project_root,
            data_dir=data_dir,
            db_path=Path(db_path) if db_path else data_dir / "nba_standings.duckdb",
            api_base_url=os.getenv("BALLDONTLIE_BASE_URL", "https://api.balldontlie.io/v1"),
            min_request_interval_seconds=float(os.getenv("BDL_MIN_REQUEST_INTERVAL_SECONDS", "12.5")),
            request_timeout_seconds=int(os.getenv("BDL_REQUEST_TIMEOUT_SECONDS", "30")),
            season_start_month=season_start_month,
        )


def configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO"),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def load_settings() -> Settings:
    settings = Settings.from_env()
    load_dotenv(dotenv_path=settings.project_root / ".env", override=False)
    load_dotenv(override=False)
    settings = Settings.from_env()
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    return settings


def season_start_date(day: date, start_month: int = DEFAULT_SEASON_START_MONTH) -> date:
    """First day of the season that ``day`` belongs to.

    A season starts on the 1st of ``start_month`` and runs into the next
    calendar year, so dates before that month belong to last year's season.
    """
    year = day.year if day.month >= start_month else day.year - 1
    return date(year, start_month, 1)
