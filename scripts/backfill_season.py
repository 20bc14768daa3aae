from __future__ import annotations

import argparse
import sys
from datetime import date

from nba_standings.api import BallDontLieClient
from nba_standings.config import configure_logging, load_settings, season_start_date
from nba_standings.pipeline import fetch_and_save_games
from nba_standings.storage import DuckDBStorage


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Store every final NBA game of the current season so far")
    parser.add_argument("--through", type=str, default=None, help="Last date to fetch, YYYY-MM-DD (default today)")
    return parser.parse_args()


def main() -> int:
    configure_logging()
    settings = load_settings()
    args = parse_args()

    try:
        through = date.fromisoformat(args.through) if args.through else date.today()
        client = BallDontLieClient(
            base_url=settings.api_base_url,
            timeout=settings.request_timeout_seconds,
            min_request_interval_seconds=settings.min_request_interval_seconds,
        )
        storage = DuckDBStorage(db_path=settings.db_path)
        start = season_start_date(through, settings.season_start_month)
        stored = fetch_and_save_games(client=client, storage=storage, start_date=start, end_date=through)
    except Exception as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    print(f"Stored {len(stored)} new games from {start} to {through}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
