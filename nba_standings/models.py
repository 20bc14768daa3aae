from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal


class Conference(str, enum.Enum):
    EAST = "East"
    WEST = "West"


class Division(str, enum.Enum):
    ATLANTIC = "Atlantic"
    CENTRAL = "Central"
    SOUTHEAST = "Southeast"
    NORTHWEST = "Northwest"
    PACIFIC = "Pacific"
    SOUTHWEST = "Southwest"

    @property
    def conference(self) -> Conference:
        return _DIVISION_CONFERENCE[self]


_DIVISION_CONFERENCE = {
    Division.ATLANTIC: Conference.EAST,
    Division.CENTRAL: Conference.EAST,
    Division.SOUTHEAST: Conference.EAST,
    Division.NORTHWEST: Conference.WEST,
    Division.PACIFIC: Conference.WEST,
    Division.SOUTHWEST: Conference.WEST,
}


class GroupBy(str, enum.Enum):
    DIVISION = "division"
    CONFERENCE = "conference"


@dataclass(frozen=True)
class Team:
    team_id: int
    name: str
    abbreviation: str
    division: Division
    conference: Conference

    def __post_init__(self) -> None:
        if self.division.conference is not self.conference:
            raise ValueError(
                f"{self.name}: division {self.division.value} belongs to the "
                f"{self.division.conference.value}, not the {self.conference.value}"
            )


@dataclass(frozen=True)
class GameResult:
    game_id: int
    game_date: date
    home_team_id: int
    away_team_id: int
    home_score: int
    away_score: int


@dataclass(frozen=True)
class TeamStanding:
    team: Team
    wins: int = 0
    losses: int = 0
    win_pct: Decimal = Decimal("0")
    division_rank: int | None = None
    conference_rank: int | None = None
    games_back: Decimal | None = None

    @property
    def games_played(self) -> int:
        return self.wins + self.losses

    def with_ranks(self, division_rank: int | None, conference_rank: int | None) -> "TeamStanding":
        return replace(self, division_rank=division_rank, conference_rank=conference_rank)


@dataclass(frozen=True)
class StandingsSnapshot:
    """One persisted row of the standings cache: a team's standing as of ``snapshot_date``."""

    snapshot_date: date
    team: Team
    wins: int
    losses: int
    win_pct: Decimal
    games_back: Decimal
    division_rank: int
    conference_rank: int
    created_at: datetime

    @staticmethod
    def from_standing(snapshot_date: date, standing: TeamStanding, created_at: datetime) -> "StandingsSnapshot":
        if standing.division_rank is None or standing.conference_rank is None or standing.games_back is None:
            raise ValueError(f"Standing for {standing.team.name} has not been ranked")
        return StandingsSnapshot(
            snapshot_date=snapshot_date,
            team=standing.team,
            wins=standing.wins,
            losses=standing.losses,
            win_pct=standing.win_pct,
            games_back=standing.games_back,
            division_rank=standing.division_rank,
            conference_rank=standing.conference_rank,
            created_at=created_at,
        )


@dataclass(frozen=True)
class StandingEntry:
    rank: int
    team_name: str
    wins: int
    losses: int
    win_pct: Decimal
    games_back: Decimal
