from __future__ import annotations

from datetime import date

import streamlit as st

from nba_standings.api import BallDontLieClient
from nba_standings.config import load_settings, season_start_date
from nba_standings.errors import InvalidRequestError, UpstreamFetchError
from nba_standings.models import GroupBy
from nba_standings.response import standings_frame
from nba_standings.service import StandingsService
from nba_standings.storage import DuckDBStorage
from nba_standings.validation import validate_standings_date


@st.cache_resource
def load_service() -> StandingsService:
    settings = load_settings()
    client = BallDontLieClient(
        base_url=settings.api_base_url,
        timeout=settings.request_timeout_seconds,
        min_request_interval_seconds=settings.min_request_interval_seconds,
    )
    storage = DuckDBStorage(db_path=settings.db_path)
    return StandingsService(client=client, storage=storage, season_start_month=settings.season_start_month)


def main() -> None:
    st.set_page_config(page_title="NBA Standings", layout="wide")
    st.title("NBA Standings by Date")

    service = load_service()
    today = date.today()
    season_start = season_start_date(today, service.season_start_month)

    left, right = st.columns(2)
    requested = left.date_input("Date", value=today, min_value=season_start, max_value=today)
    group_by = GroupBy(right.radio("Group by", [g.value for g in GroupBy], horizontal=True))

    try:
        validate_standings_date(requested, today=today, season_start_month=service.season_start_month)
        with st.spinner("Loading standings..."):
            standings = service.get_standings(requested, group_by)
    except InvalidRequestError as exc:
        st.warning(str(exc))
        return
    except UpstreamFetchError as exc:
        st.error(f"Could not fetch games from balldontlie: {exc}")
        return

    frame = standings_frame(standings)
    columns = st.columns(3 if group_by is GroupBy.DIVISION else 2)
    for i, (group, rows) in enumerate(frame.groupby("group", sort=False)):
        col = columns[i % len(columns)]
        col.subheader(group)
        col.dataframe(rows.drop(columns="group").set_index("rank"), use_container_width=True)


if __name__ == "__main__":
    main()
