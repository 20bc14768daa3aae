import random
from datetime import date
from decimal import Decimal

from nba_standings.models import Conference, Division, GameResult, Team
from nba_standings.ranking import (
    assign_conference_ranks,
    assign_division_ranks,
    assign_games_back,
    compute_records,
    win_percentage,
)
from nba_standings.teams import NBA_TEAMS


def _game(game_id: int, home: int, away: int, home_score: int, away_score: int) -> GameResult:
    return GameResult(
        game_id=game_id,
        game_date=date(2024, 10, 22),
        home_team_id=home,
        away_team_id=away,
        home_score=home_score,
        away_score=away_score,
    )


def _random_games(n: int, seed: int = 11) -> list[GameResult]:
    rng = random.Random(seed)
    games = []
    for game_id in range(1, n + 1):
        home, away = rng.sample(range(1, 31), 2)
        home_score = rng.randint(85, 130)
        away_score = rng.randint(85, 130)
        if home_score == away_score:
            home_score += 1
        games.append(_game(game_id, home, away, home_score, away_score))
    return games


def _rank_all(games: list[GameResult], teams=NBA_TEAMS):
    standings = compute_records(games, teams)
    return assign_games_back(assign_conference_ranks(assign_division_ranks(standings)))


def test_single_game_scenario() -> None:
    standings = compute_records([_game(1, home=2, away=14, home_score=110, away_score=105)], NBA_TEAMS)

    assert standings[2].wins == 1
    assert standings[2].losses == 0
    assert standings[2].win_pct == Decimal("1.000")
    assert standings[14].wins == 0
    assert standings[14].losses == 1
    assert standings[14].win_pct == Decimal("0.000")


def test_away_team_wins_when_it_outscores_home() -> None:
    standings = compute_records([_game(1, home=2, away=14, home_score=99, away_score=101)], NBA_TEAMS)
    assert (standings[14].wins, standings[14].losses) == (1, 0)
    assert (standings[2].wins, standings[2].losses) == (0, 1)


def test_every_rostered_team_gets_a_record() -> None:
    standings = compute_records([], NBA_TEAMS)

    assert set(standings) == {t.team_id for t in NBA_TEAMS}
    assert all(s.wins == 0 and s.losses == 0 for s in standings.values())
    assert all(s.win_pct == 0 for s in standings.values())


def test_wins_and_losses_both_sum_to_resolved_games() -> None:
    games = _random_games(200)
    games.append(_game(999, home=2, away=404, home_score=100, away_score=90))

    standings = compute_records(games, NBA_TEAMS)

    assert sum(s.wins for s in standings.values()) == 200
    assert sum(s.losses for s in standings.values()) == 200


def test_unknown_team_game_is_skipped_and_logged(caplog) -> None:
    games = [
        _game(1, home=2, away=404, home_score=100, away_score=90),
        _game(2, home=2, away=3, home_score=100, away_score=90),
    ]

    with caplog.at_level("WARNING"):
        standings = compute_records(games, NBA_TEAMS)

    assert standings[2].wins == 1
    assert standings[3].losses == 1
    assert "Skipping game 1" in caplog.text


def test_records_do_not_depend_on_game_order() -> None:
    games = _random_games(150)
    shuffled = list(games)
    random.Random(3).shuffle(shuffled)

    assert _rank_all(games) == _rank_all(shuffled)


def test_win_percentage_rounds_half_up() -> None:
    # 1/16 = 0.0625 and 3/16 = 0.1875 sit exactly on the rounding boundary.
    assert win_percentage(1, 15) == Decimal("0.063")
    assert win_percentage(3, 13) == Decimal("0.188")
    assert win_percentage(2, 1) == Decimal("0.667")
    assert win_percentage(0, 0) == Decimal("0")


def test_three_way_tie_is_broken_by_name() -> None:
    teams = [
        Team(1, "Gamma", "GAM", Division.ATLANTIC, Conference.EAST),
        Team(2, "Alpha", "ALP", Division.ATLANTIC, Conference.EAST),
        Team(3, "Beta", "BET", Division.ATLANTIC, Conference.EAST),
    ]
    games = [
        _game(1, home=1, away=2, home_score=100, away_score=90),
        _game(2, home=2, away=3, home_score=100, away_score=90),
        _game(3, home=3, away=1, home_score=100, away_score=90),
    ]

    ranked = assign_division_ranks(compute_records(games, teams))

    assert all((s.wins, s.losses) == (1, 1) for s in ranked.values())
    assert {s.team.name: s.division_rank for s in ranked.values()} == {"Alpha": 1, "Beta": 2, "Gamma": 3}


def test_zero_game_teams_are_ranked_by_name() -> None:
    teams = [
        Team(1, "Zephyrs", "ZEP", Division.PACIFIC, Conference.WEST),
        Team(2, "Aces", "ACE", Division.PACIFIC, Conference.WEST),
    ]

    ranked = assign_conference_ranks(assign_division_ranks(compute_records([], teams)))

    assert ranked[2].division_rank == 1
    assert ranked[1].division_rank == 2
    assert ranked[2].conference_rank == 1


def test_more_wins_ranks_first_on_equal_percentage() -> None:
    teams = [
        Team(1, "Aardvarks", "AAR", Division.CENTRAL, Conference.EAST),
        Team(2, "Zebras", "ZEB", Division.CENTRAL, Conference.EAST),
        Team(3, "Others", "OTH", Division.SOUTHEAST, Conference.EAST),
    ]
    # Aardvarks 1-1 (.500), Zebras 2-2 (.500).
    games = [
        _game(1, home=1, away=3, home_score=100, away_score=90),
        _game(2, home=1, away=3, home_score=90, away_score=100),
        _game(3, home=2, away=3, home_score=100, away_score=90),
        _game(4, home=2, away=3, home_score=100, away_score=90),
        _game(5, home=2, away=3, home_score=90, away_score=100),
        _game(6, home=2, away=3, home_score=90, away_score=100),
    ]

    ranked = assign_division_ranks(compute_records(games, teams))

    assert ranked[2].division_rank == 1
    assert ranked[1].division_rank == 2


def test_ranks_are_dense_per_group() -> None:
    ranked = _rank_all(_random_games(300))

    for division in Division:
        ranks = sorted(s.division_rank for s in ranked.values() if s.team.division is division)
        assert ranks == [1, 2, 3, 4, 5]
    for conference in Conference:
        ranks = sorted(s.conference_rank for s in ranked.values() if s.team.conference is conference)
        assert ranks == list(range(1, 16))


def test_ordering_law_within_conference() -> None:
    ranked = _rank_all(_random_games(300, seed=5))

    for conference in Conference:
        rows = [s for s in ranked.values() if s.team.conference is conference]
        for a in rows:
            for b in rows:
                if a.win_pct > b.win_pct:
                    assert a.conference_rank < b.conference_rank
                elif a.win_pct == b.win_pct and a.wins > b.wins:
                    assert a.conference_rank < b.conference_rank
                elif a.win_pct == b.win_pct and a.wins == b.wins and a.team.name < b.team.name:
                    assert a.conference_rank < b.conference_rank


def test_rank_passes_are_independent_of_call_order() -> None:
    standings = compute_records(_random_games(120), NBA_TEAMS)

    division_first = assign_conference_ranks(assign_division_ranks(standings))
    conference_first = assign_division_ranks(assign_conference_ranks(standings))

    assert division_first == conference_first


def test_rank_passes_do_not_mutate_input() -> None:
    standings = compute_records(_random_games(50), NBA_TEAMS)

    assign_division_ranks(standings)
    assign_conference_ranks(standings)

    assert all(s.division_rank is None and s.conference_rank is None for s in standings.values())


def test_games_back_against_conference_leader() -> None:
    teams = [
        Team(1, "Leaders", "LEA", Division.ATLANTIC, Conference.EAST),
        Team(2, "Chasers", "CHA", Division.CENTRAL, Conference.EAST),
        Team(3, "Westerners", "WES", Division.PACIFIC, Conference.WEST),
    ]
    # Leaders 3-0, Chasers 1-3, Westerners 1-2 (alone in the West).
    games = [
        _game(1, home=1, away=2, home_score=100, away_score=90),
        _game(2, home=1, away=3, home_score=100, away_score=90),
        _game(3, home=1, away=2, home_score=100, away_score=90),
        _game(4, home=2, away=3, home_score=100, away_score=90),
        _game(5, home=3, away=2, home_score=100, away_score=90),
    ]

    ranked = assign_games_back(compute_records(games, teams))

    assert ranked[1].games_back == Decimal("0.0")
    assert ranked[2].games_back == Decimal("2.5")
    assert ranked[3].games_back == Decimal("0.0")


def test_with_ranks_returns_new_value() -> None:
    standing = compute_records([], NBA_TEAMS)[2]
    ranked = standing.with_ranks(1, 4)

    assert (ranked.division_rank, ranked.conference_rank) == (1, 4)
    assert standing.division_rank is None
