from __future__ import annotations

from datetime import date
from typing import Any

import pandas as pd

from nba_standings.models import GroupBy, StandingEntry


def _entry_payload(entry: StandingEntry) -> dict[str, Any]:
    return {
        "rank": entry.rank,
        "team_name": entry.team_name,
        "wins": entry.wins,
        "losses": entry.losses,
        "win_pct": f"{entry.win_pct:.3f}",
        "games_back": f"{entry.games_back:.1f}",
    }


def build_response(
    snapshot_date: date,
    group_by: GroupBy,
    standings: dict[str, list[StandingEntry]],
) -> dict[str, Any]:
    return {
        "date": snapshot_date.isoformat(),
        "group_by": group_by.value,
        "standings": {group: [_entry_payload(e) for e in entries] for group, entries in standings.items()},
    }


def standings_frame(standings: dict[str, list[StandingEntry]]) -> pd.DataFrame:
    columns = ["group", "rank", "team_name", "wins", "losses", "win_pct", "games_back"]
    rows = [
        {
            "group": group,
            "rank": e.rank,
            "team_name": e.team_name,
            "wins": e.wins,
            "losses": e.losses,
            "win_pct": float(e.win_pct),
            "games_back": float(e.games_back),
        }
        for group, entries in standings.items()
        for e in entries
    ]
    return pd.DataFrame(rows, columns=columns)
