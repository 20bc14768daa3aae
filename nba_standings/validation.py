from __future__ import annotations

from datetime import date

from nba_standings.config import DEFAULT_SEASON_START_MONTH, season_start_date
from nba_standings.errors import InvalidDateError, InvalidGroupByError
from nba_standings.models import GroupBy


def validate_standings_date(
    requested: date,
    today: date | None = None,
    season_start_month: int = DEFAULT_SEASON_START_MONTH,
) -> None:
    """Reject dates in the future or before the start of the current season."""
    today = today or date.today()
    if requested > today:
        raise InvalidDateError("Date cannot be in the future")

    season_start = season_start_date(today, season_start_month)
    if requested < season_start:
        raise InvalidDateError(f"Date must be within the current NBA season (on or after {season_start})")


def parse_group_by(value: str | GroupBy) -> GroupBy:
    if isinstance(value, GroupBy):
        return value
    try:
        return GroupBy(str(value).strip().lower())
    except ValueError as exc:
        options = ", ".join(g.value for g in GroupBy)
        raise InvalidGroupByError(f"Invalid groupBy {value!r}. Must be one of: {options}") from exc
