from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from pathlib import Path
from typing import Any

import duckdb

from nba_standings.errors import DuplicateSnapshotError
from nba_standings.models import (
    Conference,
    Division,
    GameResult,
    StandingsSnapshot,
    Team,
)
from nba_standings.teams import NBA_TEAMS

_SNAPSHOT_COLUMNS = """
    s.snapshot_date, s.wins, s.losses, s.win_pct, s.games_back,
    s.division_rank, s.conference_rank, s.created_at,
    t.team_id, t.name, t.abbreviation, t.division, t.conference
"""


class DuckDBStorage:
    def __init__(self, db_path: Path, roster: Iterable[Team] = NBA_TEAMS) -> None:
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_schema()
        self.seed_teams(roster)

    def _connect(self) -> duckdb.DuckDBPyConnection:
        return duckdb.connect(str(self.db_path))

    def _init_schema(self) -> None:
        with self._connect() as con:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS teams (
                    team_id INTEGER PRIMARY KEY,
                    name VARCHAR NOT NULL,
                    abbreviation VARCHAR NOT NULL,
                    division VARCHAR NOT NULL,
                    conference VARCHAR NOT NULL
                );
                """
            )
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS games (
                    game_id BIGINT PRIMARY KEY,
                    game_date DATE NOT NULL,
                    home_team_id INTEGER NOT NULL,
                    away_team_id INTEGER NOT NULL,
                    home_score INTEGER NOT NULL,
                    away_score INTEGER NOT NULL,
                    created_at TIMESTAMP NOT NULL
                );
                """
            )
            con.execute("CREATE INDEX IF NOT EXISTS idx_games_date ON games (game_date);")
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS standings_snapshots (
                    snapshot_date DATE NOT NULL,
                    team_id INTEGER NOT NULL,
                    wins INTEGER NOT NULL,
                    losses INTEGER NOT NULL,
                    win_pct DECIMAL(5, 3) NOT NULL,
                    games_back DECIMAL(4, 1) NOT NULL,
                    division_rank INTEGER NOT NULL,
                    conference_rank INTEGER NOT NULL,
                    created_at TIMESTAMP NOT NULL,
                    PRIMARY KEY (snapshot_date, team_id)
                );
                """
            )

    # -- team roster -------------------------------------------------------

    def seed_teams(self, teams: Iterable[Team]) -> None:
        rows = [(t.team_id, t.name, t.abbreviation, t.division.value, t.conference.value) for t in teams]
        if not rows:
            return
        with self._connect() as con:
            con.executemany(
                """
                INSERT OR IGNORE INTO teams(team_id, name, abbreviation, division, conference)
                VALUES (?, ?, ?, ?, ?)
                """,
                rows,
            )

    def load_teams(self) -> list[Team]:
        with self._connect() as con:
            rows = con.execute(
                "SELECT team_id, name, abbreviation, division, conference FROM teams ORDER BY team_id"
            ).fetchall()
        return [_team_from_row(r) for r in rows]

    # -- game results ------------------------------------------------------

    def existing_game_ids(self, game_ids: Iterable[int]) -> set[int]:
        ids = list(set(game_ids))
        if not ids:
            return set()
        with self._connect() as con:
            rows = con.execute(
                "SELECT game_id FROM games WHERE list_contains(?::BIGINT[], game_id)",
                [ids],
            ).fetchall()
        return {int(r[0]) for r in rows}

    def insert_games(self, games: list[GameResult]) -> None:
        created_at = datetime.utcnow()
        rows = [
            (g.game_id, g.game_date, g.home_team_id, g.away_team_id, g.home_score, g.away_score, created_at)
            for g in games
        ]
        if not rows:
            return
        with self._connect() as con:
            con.executemany(
                """
                INSERT OR IGNORE INTO games(
                    game_id, game_date, home_team_id, away_team_id, home_score, away_score, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )

    def load_games_through(self, through: date) -> list[GameResult]:
        with self._connect() as con:
            rows = con.execute(
                """
                SELECT game_id, game_date, home_team_id, away_team_id, home_score, away_score
                FROM games
                WHERE game_date <= ?
                ORDER BY game_date, game_id
                """,
                [through],
            ).fetchall()
        return [
            GameResult(
                game_id=r[0],
                game_date=r[1],
                home_team_id=r[2],
                away_team_id=r[3],
                home_score=r[4],
                away_score=r[5],
            )
            for r in rows
        ]

    def most_recent_game_date(self) -> date | None:
        with self._connect() as con:
            row = con.execute("SELECT max(game_date) FROM games").fetchone()
        return row[0] if row else None

    # -- standings snapshots -----------------------------------------------

    def snapshot_exists(self, snapshot_date: date) -> bool:
        with self._connect() as con:
            row = con.execute(
                "SELECT EXISTS (SELECT 1 FROM standings_snapshots WHERE snapshot_date = ?)",
                [snapshot_date],
            ).fetchone()
        return bool(row[0])

    def save_snapshots(self, snapshots: list[StandingsSnapshot]) -> None:
        """Insert all rows in a single transaction; a duplicate (date, team) rolls back every row."""
        rows = [
            (
                s.snapshot_date,
                s.team.team_id,
                s.wins,
                s.losses,
                s.win_pct,
                s.games_back,
                s.division_rank,
                s.conference_rank,
                s.created_at,
            )
            for s in snapshots
        ]
        if not rows:
            return
        # Closing the connection discards an uncommitted transaction.
        with self._connect() as con:
            con.begin()
            try:
                con.executemany(
                    """
                    INSERT INTO standings_snapshots(
                        snapshot_date, team_id, wins, losses, win_pct, games_back,
                        division_rank, conference_rank, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    rows,
                )
                con.commit()
            except duckdb.ConstraintException as exc:
                raise _duplicate_snapshot_error(snapshots) from exc
            except duckdb.TransactionException as exc:
                # A concurrent writer's rows only conflict at commit time.
                if "constraint violation" not in str(exc).lower():
                    raise
                raise _duplicate_snapshot_error(snapshots) from exc

    def find_snapshots_by_division(self, snapshot_date: date, division: Division) -> list[StandingsSnapshot]:
        return self._find_snapshots("t.division = ?", [snapshot_date, division.value])

    def find_snapshots_by_conference(self, snapshot_date: date, conference: Conference) -> list[StandingsSnapshot]:
        return self._find_snapshots("t.conference = ?", [snapshot_date, conference.value])

    def _find_snapshots(self, group_filter: str, params: list[Any]) -> list[StandingsSnapshot]:
        with self._connect() as con:
            rows = con.execute(
                f"""
                SELECT {_SNAPSHOT_COLUMNS}
                FROM standings_snapshots s
                JOIN teams t ON t.team_id = s.team_id
                WHERE s.snapshot_date = ? AND {group_filter}
                """,
                params,
            ).fetchall()
        return [
            StandingsSnapshot(
                snapshot_date=r[0],
                wins=r[1],
                losses=r[2],
                win_pct=r[3],
                games_back=r[4],
                division_rank=r[5],
                conference_rank=r[6],
                created_at=r[7],
                team=_team_from_row(r[8:13]),
            )
            for r in rows
        ]


def _duplicate_snapshot_error(snapshots: list[StandingsSnapshot]) -> DuplicateSnapshotError:
    dates = sorted({str(s.snapshot_date) for s in snapshots})
    return DuplicateSnapshotError(f"Standings snapshot already stored for {', '.join(dates)}")


def _team_from_row(row: tuple[Any, ...]) -> Team:
    return Team(
        team_id=row[0],
        name=row[1],
        abbreviation=row[2],
        division=Division(row[3]),
        conference=Conference(row[4]),
    )
