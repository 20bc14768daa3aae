from __future__ import annotations

import argparse
import json
import sys
from datetime import date

from nba_standings.api import BallDontLieClient
from nba_standings.config import configure_logging, load_settings
from nba_standings.errors import InvalidDateError, InvalidRequestError
from nba_standings.response import build_response, standings_frame
from nba_standings.service import StandingsService
from nba_standings.storage import DuckDBStorage
from nba_standings.validation import parse_group_by, validate_standings_date


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Show NBA standings as of a date")
    parser.add_argument("--date", type=str, default=None, help="Standings date, YYYY-MM-DD (default today)")
    parser.add_argument("--group-by", type=str, default="division", help="division or conference")
    parser.add_argument("--json", action="store_true", help="Print the JSON response instead of a table")
    return parser.parse_args(argv)


def _parse_date(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def main(argv: list[str] | None = None) -> int:
    configure_logging()
    settings = load_settings()
    args = parse_args(argv)

    try:
        requested = _parse_date(args.date)
        group_by = parse_group_by(args.group_by)
        validate_standings_date(requested, season_start_month=settings.season_start_month)
    except InvalidRequestError as exc:
        print(f"INVALID REQUEST: {exc}", file=sys.stderr)
        return 2

    try:
        client = BallDontLieClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            min_request_interval_seconds=settings.min_request_interval_seconds,
        )
        storage = DuckDBStorage(db_path=settings.db_path)
        service = StandingsService(client=client, storage=storage, season_start_month=settings.season_start_month)
        standings = service.get_standings(requested, group_by)
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps(build_response(requested, group_by, standings), indent=2))
    else:
        frame = standings_frame(standings)
        for group, rows in frame.groupby("group", sort=False):
            print(f"\n{group}")
            print(rows.drop(columns="group").to_string(index=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
