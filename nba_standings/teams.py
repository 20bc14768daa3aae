from __future__ import annotations

from nba_standings.models import Conference, Division, Team

# Keyed by balldontlie team id.
NBA_TEAMS: tuple[Team, ...] = (
    Team(1, "Atlanta Hawks", "ATL", Division.SOUTHEAST, Conference.EAST),
    Team(2, "Boston Celtics", "BOS", Division.ATLANTIC, Conference.EAST),
    Team(3, "Brooklyn Nets", "BKN", Division.ATLANTIC, Conference.EAST),
    Team(4, "Charlotte Hornets", "CHA", Division.SOUTHEAST, Conference.EAST),
    Team(5, "Chicago Bulls", "CHI", Division.CENTRAL, Conference.EAST),
    Team(6, "Cleveland Cavaliers", "CLE", Division.CENTRAL, Conference.EAST),
    Team(7, "Dallas Mavericks", "DAL", Division.SOUTHWEST, Conference.WEST),
    Team(8, "Denver Nuggets", "DEN", Division.NORTHWEST, Conference.WEST),
    Team(9, "Detroit Pistons", "DET", Division.CENTRAL, Conference.EAST),
    Team(10, "Golden State Warriors", "GSW", Division.PACIFIC, Conference.WEST),
    Team(11, "Houston Rockets", "HOU", Division.SOUTHWEST, Conference.WEST),
    Team(12, "Indiana Pacers", "IND", Division.CENTRAL, Conference.EAST),
    Team(13, "LA Clippers", "LAC", Division.PACIFIC, Conference.WEST),
    Team(14, "Los Angeles Lakers", "LAL", Division.PACIFIC, Conference.WEST),
    Team(15, "Memphis Grizzlies", "MEM", Division.SOUTHWEST, Conference.WEST),
    Team(16, "Miami Heat", "MIA", Division.SOUTHEAST, Conference.EAST),
    Team(17, "Milwaukee Bucks", "MIL", Division.CENTRAL, Conference.EAST),
    Team(18, "Minnesota Timberwolves", "MIN", Division.NORTHWEST, Conference.WEST),
    Team(19, "New Orleans Pelicans", "NOP", Division.SOUTHWEST, Conference.WEST),
    Team(20, "New York Knicks", "NYK", Division.ATLANTIC, Conference.EAST),
    Team(21, "Oklahoma City Thunder", "OKC", Division.NORTHWEST, Conference.WEST),
    Team(22, "Orlando Magic", "ORL", Division.SOUTHEAST, Conference.EAST),
    Team(23, "Philadelphia 76ers", "PHI", Division.ATLANTIC, Conference.EAST),
    Team(24, "Phoenix Suns", "PHX", Division.PACIFIC, Conference.WEST),
    Team(25, "Portland Trail Blazers", "POR", Division.NORTHWEST, Conference.WEST),
    Team(26, "Sacramento Kings", "SAC", Division.PACIFIC, Conference.WEST),
    Team(27, "San Antonio Spurs", "SAS", Division.SOUTHWEST, Conference.WEST),
    Team(28, "Toronto Raptors", "TOR", Division.ATLANTIC, Conference.EAST),
    Team(29, "Utah Jazz", "UTA", Division.NORTHWEST, Conference.WEST),
    Team(30, "Washington Wizards", "WAS", Division.SOUTHEAST, Conference.EAST),
)
