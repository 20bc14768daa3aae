from __future__ import annotations

import logging
import os
import time
from datetime import date
from typing import Any

import requests

from nba_standings.errors import UpstreamFetchError

logger = logging.getLogger(__name__)

DEFAULT_PER_PAGE = 100


class BallDontLieClient:
    """Thin balldontlie client.

    Requests are throttled but never retried: a failed call surfaces as
    ``UpstreamFetchError`` straight away so the API's rate limit is not burned
    on retries.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str | None = None,
        timeout: int = 30,
        min_request_interval_seconds: float = 0.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.min_request_interval_seconds = max(0.0, min_request_interval_seconds)
        self._last_request_ts = 0.0
        self.api_key = (api_key or os.getenv("BALLDONTLIE_API_KEY") or "").strip()
        if not self.api_key:
            raise RuntimeError(
                "BALLDONTLIE_API_KEY is not set. Add it to your environment or .env file. "
                "See .env.example for the expected format."
            )

        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": self.api_key,
                "Accept": "application/json",
            }
        )

    def _request(self, endpoint: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        elapsed = time.time() - self._last_request_ts
        if elapsed < self.min_request_interval_seconds:
            time.sleep(self.min_request_interval_seconds - elapsed)

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            self._last_request_ts = time.time()
            response.raise_for_status()
            payload = response.json()
        except requests.HTTPError as exc:
            msg = exc.response.text[:300] if exc.response is not None else str(exc)
            raise UpstreamFetchError(f"balldontlie request failed ({url}): {msg}") from exc
        except ValueError as exc:
            raise UpstreamFetchError(f"balldontlie returned invalid JSON ({url})") from exc
        except requests.RequestException as exc:
            raise UpstreamFetchError(f"Network error calling balldontlie ({url}): {exc}") from exc

        if not isinstance(payload, dict) or not isinstance(payload.get("data", []), list):
            raise UpstreamFetchError(f"Unexpected balldontlie payload shape ({url})")
        return payload

    def _get_paginated(self, endpoint: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        cursor: int | None = None
        out: list[dict[str, Any]] = []
        pages = 0
        while True:
            req_params = dict(params)
            if cursor is not None:
                req_params["cursor"] = cursor
            payload = self._request(endpoint=endpoint, params=req_params)
            pages += 1
            out.extend(payload.get("data", []))

            meta = payload.get("meta") or {}
            next_cursor = meta.get("next_cursor")
            if next_cursor is None:
                break
            try:
                cursor = int(next_cursor)
            except (TypeError, ValueError) as exc:
                raise UpstreamFetchError(f"Invalid next_cursor from balldontlie: {next_cursor!r}") from exc
        logger.debug("Fetched %s pages (%s rows) from %s", pages, len(out), endpoint)
        return out

    def get_games(self, start_date: date, end_date: date) -> list[dict[str, Any]]:
        """All regular-season games between ``start_date`` and ``end_date`` inclusive, across every page."""
        logger.info("Fetching games from %s to %s", start_date, end_date)
        params = {
            "start_date": start_date.isoformat(),
            "end_date": end_date.isoformat(),
            "per_page": DEFAULT_PER_PAGE,
            "postseason": "false",
        }
        return self._get_paginated("games", params)
