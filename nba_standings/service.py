from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator

from nba_standings.config import DEFAULT_SEASON_START_MONTH
from nba_standings.models import (
    Conference,
    Division,
    GroupBy,
    StandingEntry,
    StandingsSnapshot,
)
from nba_standings.pipeline import GamesSource, fetch_and_save_games
from nba_standings.ranking import (
    assign_conference_ranks,
    assign_division_ranks,
    assign_games_back,
    compute_records,
)
from nba_standings.storage import DuckDBStorage
from nba_standings.validation import parse_group_by
from nba_standings.watermark import determine_fetch_start

logger = logging.getLogger(__name__)


class StandingsService:
    """Standings by date, served from the snapshot cache and computed on a miss.

    A miss fetches only the games not yet stored, ranks every stored game up
    to the date and persists one snapshot row per team. Concurrent misses for
    the same date are serialized so only the first one reaches balldontlie.
    """

    def __init__(
        self,
        client: GamesSource,
        storage: DuckDBStorage,
        season_start_month: int = DEFAULT_SEASON_START_MONTH,
    ) -> None:
        self.client = client
        self.storage = storage
        self.season_start_month = season_start_month
        self._date_locks: dict[date, threading.Lock] = {}
        self._date_locks_guard = threading.Lock()

    @contextmanager
    def _locked(self, snapshot_date: date) -> Iterator[None]:
        with self._date_locks_guard:
            lock = self._date_locks.setdefault(snapshot_date, threading.Lock())
        with lock:
            yield

    def get_standings(self, snapshot_date: date, group_by: GroupBy | str) -> dict[str, list[StandingEntry]]:
        group_by = parse_group_by(group_by)
        logger.info("Getting standings for %s grouped by %s", snapshot_date, group_by.value)

        if self.storage.snapshot_exists(snapshot_date):
            logger.info("Standings found in cache for %s", snapshot_date)
        else:
            with self._locked(snapshot_date):
                if self.storage.snapshot_exists(snapshot_date):
                    logger.info("Standings for %s cached by a concurrent request", snapshot_date)
                else:
                    logger.info("Standings not cached for %s; calculating", snapshot_date)
                    self._compute_snapshot(snapshot_date)

        return self._read_snapshot(snapshot_date, group_by)

    def _compute_snapshot(self, snapshot_date: date) -> None:
        fetch_start = determine_fetch_start(self.storage, snapshot_date, self.season_start_month)
        if fetch_start > snapshot_date:
            # Stored games run contiguously from season start past this date.
            logger.info("Stored games already cover %s; skipping fetch", snapshot_date)
        else:
            logger.info("Fetch window: %s to %s", fetch_start, snapshot_date)
            fetch_and_save_games(self.client, self.storage, fetch_start, snapshot_date)

        games = self.storage.load_games_through(snapshot_date)
        teams = self.storage.load_teams()
        logger.info("Ranking %s teams over %s games up to %s", len(teams), len(games), snapshot_date)

        standings = compute_records(games, teams)
        standings = assign_division_ranks(standings)
        standings = assign_conference_ranks(standings)
        standings = assign_games_back(standings)

        created_at = datetime.utcnow()
        rows = [StandingsSnapshot.from_standing(snapshot_date, s, created_at) for s in standings.values()]
        self.storage.save_snapshots(rows)
        logger.info("Saved %s standings snapshot rows for %s", len(rows), snapshot_date)

    def _read_snapshot(self, snapshot_date: date, group_by: GroupBy) -> dict[str, list[StandingEntry]]:
        out: dict[str, list[StandingEntry]] = {}
        if group_by is GroupBy.DIVISION:
            for division in Division:
                rows = self.storage.find_snapshots_by_division(snapshot_date, division)
                rows.sort(key=lambda s: s.division_rank)
                out[division.value] = [_entry(s, s.division_rank) for s in rows]
        else:
            for conference in Conference:
                rows = self.storage.find_snapshots_by_conference(snapshot_date, conference)
                rows.sort(key=lambda s: s.conference_rank)
                out[conference.value] = [_entry(s, s.conference_rank) for s in rows]
        return out


def _entry(snapshot: StandingsSnapshot, rank: int) -> StandingEntry:
    return StandingEntry(
        rank=rank,
        team_name=snapshot.team.name,
        wins=snapshot.wins,
        losses=snapshot.losses,
        win_pct=snapshot.win_pct,
        games_back=snapshot.games_back,
    )
