from __future__ import annotations


class StandingsError(Exception):
    """Base class for errors raised by the standings package."""


class UpstreamFetchError(StandingsError):
    """balldontlie request failed (network, non-2xx status or malformed payload). Never retried."""


class DuplicateSnapshotError(StandingsError):
    """A snapshot row for the same (date, team) pair already exists."""


class InvalidRequestError(StandingsError):
    """Caller-side request validation failed."""


class InvalidDateError(InvalidRequestError):
    pass


class InvalidGroupByError(InvalidRequestError):
    pass
