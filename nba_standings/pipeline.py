from __future__ import annotations

import logging
from datetime import date
from typing import Any, Protocol

from nba_standings.models import GameResult
from nba_standings.storage import DuckDBStorage

logger = logging.getLogger(__name__)

FINAL_STATUS = "Final"


class GamesSource(Protocol):
    def get_games(self, start_date: date, end_date: date) -> list[dict[str, Any]]: ...


def _game_date(raw: Any) -> date:
    # balldontlie sends either "2024-10-22" or a full ISO timestamp.
    return date.fromisoformat(str(raw)[:10])


def parse_games(raw_rows: list[dict[str, Any]]) -> list[GameResult]:
    """Final games from a balldontlie ``/games`` payload; everything else is dropped."""
    out: list[GameResult] = []
    for row in raw_rows:
        if row.get("status") != FINAL_STATUS:
            logger.debug("Game %s is not final (status=%r), skipping", row.get("id"), row.get("status"))
            continue

        home_team = row.get("home_team") or {}
        away_team = row.get("visitor_team") or row.get("away_team") or {}
        try:
            out.append(
                GameResult(
                    game_id=int(row["id"]),
                    game_date=_game_date(row["date"]),
                    home_team_id=int(home_team["id"]),
                    away_team_id=int(away_team["id"]),
                    home_score=int(row["home_team_score"]),
                    away_score=int(row.get("visitor_team_score", row.get("away_team_score"))),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed game record %s: %s", row.get("id"), exc)
    return out


def fetch_and_save_games(
    client: GamesSource,
    storage: DuckDBStorage,
    start_date: date,
    end_date: date,
) -> list[GameResult]:
    """Pull games for ``[start_date, end_date]`` and append the new final ones to storage.

    Games already stored (by balldontlie id) are left untouched; games naming a
    team outside the roster are skipped with a warning. Returns only the games
    stored by this call.
    """
    raw_rows = client.get_games(start_date, end_date)
    logger.info("Received %s games from balldontlie", len(raw_rows))

    games = parse_games(raw_rows)
    known_team_ids = {team.team_id for team in storage.load_teams()}
    existing_ids = storage.existing_game_ids(g.game_id for g in games)

    new_games: dict[int, GameResult] = {}
    for game in games:
        if game.game_id in existing_ids or game.game_id in new_games:
            logger.debug("Game %s already stored, skipping", game.game_id)
            continue
        if game.home_team_id not in known_team_ids or game.away_team_id not in known_team_ids:
            logger.warning(
                "Skipping game %s: unknown team (home=%s, away=%s)",
                game.game_id,
                game.home_team_id,
                game.away_team_id,
            )
            continue
        new_games[game.game_id] = game

    stored = list(new_games.values())
    if stored:
        storage.insert_games(stored)
        logger.info("Saved %s new games", len(stored))
    else:
        logger.info("No new games to save")
    return stored
