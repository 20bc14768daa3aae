from __future__ import annotations

import logging
from datetime import date

from nba_standings.config import DEFAULT_SEASON_START_MONTH, season_start_date
from nba_standings.storage import DuckDBStorage

logger = logging.getLogger(__name__)


def determine_fetch_start(
    storage: DuckDBStorage,
    requested_date: date,
    season_start_month: int = DEFAULT_SEASON_START_MONTH,
) -> date:
    """Earliest date that must be re-fetched to bring stored games up to ``requested_date``.

    The most recent stored game date is returned as-is rather than the day
    after it: a fetch made during that day may have seen only some of its
    games as final.
    """
    most_recent = storage.most_recent_game_date()
    if most_recent is not None:
        logger.info("Most recent stored game date: %s", most_recent)
        return most_recent

    season_start = season_start_date(requested_date, season_start_month)
    logger.info("No stored games; fetching from season start %s", season_start)
    return season_start
