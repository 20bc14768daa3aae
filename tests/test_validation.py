from datetime import date

import pytest

from nba_standings.config import Settings, load_settings
from nba_standings.errors import InvalidDateError, InvalidGroupByError, InvalidRequestError
from nba_standings.models import Conference, Division, GroupBy, Team
from nba_standings.validation import parse_group_by, validate_standings_date


def test_date_in_current_season_is_accepted() -> None:
    validate_standings_date(date(2025, 10, 1), today=date(2026, 1, 15))
    validate_standings_date(date(2026, 1, 15), today=date(2026, 1, 15))


def test_future_date_is_rejected() -> None:
    with pytest.raises(InvalidDateError, match="future"):
        validate_standings_date(date(2026, 1, 16), today=date(2026, 1, 15))


def test_date_before_current_season_is_rejected() -> None:
    with pytest.raises(InvalidDateError, match="2025-10-01"):
        validate_standings_date(date(2025, 9, 30), today=date(2026, 1, 15))


def test_validation_errors_are_request_errors() -> None:
    assert issubclass(InvalidDateError, InvalidRequestError)
    assert issubclass(InvalidGroupByError, InvalidRequestError)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("division", GroupBy.DIVISION),
        ("DIVISION", GroupBy.DIVISION),
        (" Conference ", GroupBy.CONFERENCE),
        (GroupBy.CONFERENCE, GroupBy.CONFERENCE),
    ],
)
def test_parse_group_by(value, expected: GroupBy) -> None:
    assert parse_group_by(value) is expected


def test_unknown_group_by_is_rejected() -> None:
    with pytest.raises(InvalidGroupByError, match="division, conference"):
        parse_group_by("league")


def test_team_division_must_match_conference() -> None:
    with pytest.raises(ValueError, match="Pacific"):
        Team(99, "Misplaced", "MIS", Division.PACIFIC, Conference.EAST)


def test_settings_read_season_start_month(monkeypatch) -> None:
    monkeypatch.setenv("SEASON_START_MONTH", "9")
    assert Settings.from_env().season_start_month == 9

    monkeypatch.setenv("SEASON_START_MONTH", "13")
    with pytest.raises(ValueError, match="SEASON_START_MONTH"):
        Settings.from_env()


def test_load_settings_creates_only_the_database_directory(monkeypatch, tmp_path) -> None:
    db_path = tmp_path / "store" / "standings.duckdb"
    monkeypatch.setenv("NBA_STANDINGS_DB_PATH", str(db_path))
    default_data_dir = Settings.from_env().data_dir
    data_dir_existed = default_data_dir.exists()

    settings = load_settings()

    assert settings.db_path == db_path
    assert db_path.parent.is_dir()
    assert default_data_dir.exists() == data_dir_existed
