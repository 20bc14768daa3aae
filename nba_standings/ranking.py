from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable, Hashable, Iterable
from dataclasses import replace
from decimal import ROUND_HALF_UP, Decimal

from nba_standings.models import GameResult, Team, TeamStanding

logger = logging.getLogger(__name__)

_PCT_QUANTUM = Decimal("0.001")
_GAMES_BACK_QUANTUM = Decimal("0.1")


def win_percentage(wins: int, losses: int) -> Decimal:
    total = wins + losses
    if total == 0:
        return Decimal("0")
    return (Decimal(wins) / Decimal(total)).quantize(_PCT_QUANTUM, rounding=ROUND_HALF_UP)


def sort_key(standing: TeamStanding) -> tuple[Decimal, int, str]:
    return (-standing.win_pct, -standing.wins, standing.team.name)


def compute_records(games: Iterable[GameResult], teams: Iterable[Team]) -> dict[int, TeamStanding]:
    """Fold final game results into one win/loss record per rostered team.

    Teams without games still get a 0-0 record. Games referencing a team that
    is not on the roster are logged and skipped.
    """
    roster = {team.team_id: team for team in teams}
    wins: dict[int, int] = {team_id: 0 for team_id in roster}
    losses: dict[int, int] = {team_id: 0 for team_id in roster}

    for game in games:
        if game.home_team_id not in roster or game.away_team_id not in roster:
            logger.warning(
                "Skipping game %s: unknown team (home=%s, away=%s)",
                game.game_id,
                game.home_team_id,
                game.away_team_id,
            )
            continue

        if game.home_score > game.away_score:
            winner, loser = game.home_team_id, game.away_team_id
        else:
            winner, loser = game.away_team_id, game.home_team_id
        wins[winner] += 1
        losses[loser] += 1

    return {
        team_id: TeamStanding(
            team=team,
            wins=wins[team_id],
            losses=losses[team_id],
            win_pct=win_percentage(wins[team_id], losses[team_id]),
        )
        for team_id, team in roster.items()
    }


def _ordered_groups(
    standings: dict[int, TeamStanding],
    group_of: Callable[[TeamStanding], Hashable],
) -> list[list[TeamStanding]]:
    groups: dict[Hashable, list[TeamStanding]] = defaultdict(list)
    for standing in standings.values():
        groups[group_of(standing)].append(standing)
    return [sorted(rows, key=sort_key) for rows in groups.values()]


def assign_division_ranks(standings: dict[int, TeamStanding]) -> dict[int, TeamStanding]:
    out: dict[int, TeamStanding] = {}
    for rows in _ordered_groups(standings, lambda s: s.team.division):
        for rank, standing in enumerate(rows, start=1):
            out[standing.team.team_id] = standing.with_ranks(rank, standing.conference_rank)
    return out


def assign_conference_ranks(standings: dict[int, TeamStanding]) -> dict[int, TeamStanding]:
    out: dict[int, TeamStanding] = {}
    for rows in _ordered_groups(standings, lambda s: s.team.conference):
        for rank, standing in enumerate(rows, start=1):
            out[standing.team.team_id] = standing.with_ranks(standing.division_rank, rank)
    return out


def assign_games_back(standings: dict[int, TeamStanding]) -> dict[int, TeamStanding]:
    """Games behind the best-ordered team of each conference; the leader is 0.0."""
    out: dict[int, TeamStanding] = {}
    for rows in _ordered_groups(standings, lambda s: s.team.conference):
        leader = rows[0]
        for standing in rows:
            diff = (leader.wins - standing.wins) + (standing.losses - leader.losses)
            games_back = (Decimal(diff) / 2).quantize(_GAMES_BACK_QUANTUM, rounding=ROUND_HALF_UP)
            out[standing.team.team_id] = replace(standing, games_back=games_back)
    return out
