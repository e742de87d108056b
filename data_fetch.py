#!/usr/bin/env python3
"""
data_fetch.py

Live-score ingestion from the ESPN scoreboard header feed, normalised into
``Game`` records and held in a time-boxed cache. A failed fetch serves the
previous cache instead of raising.
"""

from __future__ import annotations

import datetime
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional, Tuple

import requests

from config import (
    PLACEHOLDER_TEAM,
    REQUEST_TIMEOUT,
    SPORTS_CACHE_MINUTES,
    SPORTS_FEED_URL,
    SUPPORTED_LEAGUES,
    TIMEZONE,
)
from panels import STATUS_FINAL, STATUS_LIVE, STATUS_SCHEDULED

_TEAM_NAME_KEYS = ("abbreviation", "shortDisplayName", "displayName")


@dataclass(frozen=True)
class Game:
    league: str
    team_a: str
    team_b: str
    score_a: str
    score_b: str
    status: str
    display_time: str = ""
    logo_a: Optional[str] = None
    logo_b: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.status == STATUS_LIVE


@dataclass(frozen=True)
class ScoreCache:
    games: Tuple[Game, ...]
    fetched_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.fetched_at < self.ttl


# ─── Parsing helpers ──────────────────────────────────────────────────────────
def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _team_name(competitor: dict) -> str:
    for key in _TEAM_NAME_KEYS:
        value = competitor.get(key)
        if value:
            return str(value)
    return PLACEHOLDER_TEAM


def _timestamp_to_local(ts: Optional[str]) -> Optional[datetime.datetime]:
    if not ts:
        return None
    for fmt in ("%Y-%m-%dT%H:%MZ", "%Y-%m-%dT%H:%M:%SZ"):
        try:
            dt = datetime.datetime.strptime(ts, fmt)
        except ValueError:
            continue
        dt = dt.replace(tzinfo=datetime.timezone.utc)
        return dt.astimezone(TIMEZONE)
    try:
        dt = datetime.datetime.fromisoformat(ts)
    except ValueError:
        logging.debug("Unparseable event date %r", ts)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(TIMEZONE)


def format_start_time(ts: Optional[str]) -> str:
    """Return ``ts`` as a local clock time such as ``7:05 PM``."""

    local = _timestamp_to_local(ts)
    if local is None:
        return ""
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def _resolve_status(event: dict) -> Tuple[str, str]:
    full_status = event.get("fullStatus")
    if not full_status:
        return STATUS_SCHEDULED, ""

    status_type = full_status.get("type") or {}
    name = status_type.get("name") or ""

    if name == "STATUS_FINAL":
        return STATUS_FINAL, ""
    if name == "STATUS_IN_PROGRESS":
        return STATUS_LIVE, status_type.get("shortDetail") or "Live"
    if name == "STATUS_SCHEDULED":
        return STATUS_SCHEDULED, format_start_time(event.get("date"))
    return STATUS_SCHEDULED, ""


def parse_event(event: dict, league: str) -> Optional[Game]:
    """Build a :class:`Game` from one feed event, or ``None`` if unusable."""

    competitors = _as_list(event.get("competitors"))
    if len(competitors) < 2:
        return None

    team_a, team_b = competitors[0], competitors[1]
    status, display_time = _resolve_status(event)

    return Game(
        league=league,
        team_a=_team_name(team_a),
        team_b=_team_name(team_b),
        score_a=str(team_a.get("score") or "0"),
        score_b=str(team_b.get("score") or "0"),
        status=status,
        display_time=display_time,
        logo_a=team_a.get("logo") or None,
        logo_b=team_b.get("logo") or None,
    )


def parse_scoreboard(data: Any) -> Tuple[Game, ...]:
    """Walk ``sports[].leagues[].events[]`` and collect supported games."""

    games = []
    if not isinstance(data, dict):
        return ()

    for sport in _as_list(data.get("sports")):
        if not isinstance(sport, dict):
            continue
        leagues = _as_list(sport.get("leagues"))
        if not leagues:
            continue
        logging.debug("Processing sport: %s", sport.get("name"))
        for league in leagues:
            if not isinstance(league, dict):
                logging.debug("Skipping malformed league entry: %r", league)
                continue
            league_name = league.get("shortName") or league.get("name")
            if league_name not in SUPPORTED_LEAGUES:
                logging.debug("Ignoring unsupported league: %s", league_name)
                continue
            for event in _as_list(league.get("events")):
                try:
                    game = parse_event(event, league_name)
                except Exception as exc:
                    logging.warning("Error parsing %s event: %s", league_name, exc)
                    continue
                if game is not None:
                    games.append(game)

    return tuple(games)


# ─── Feed client ──────────────────────────────────────────────────────────────
class ScoreFeed:
    """Fetches games from the scoreboard feed behind a TTL cache."""

    def __init__(
        self,
        url: str = SPORTS_FEED_URL,
        *,
        session: Optional[requests.Session] = None,
        clock: Callable[[], float] = time.monotonic,
        ttl: float = SPORTS_CACHE_MINUTES * 60,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.url = url
        self.ttl = ttl
        self.timeout = timeout
        self._session = session or requests.Session()
        self._clock = clock
        self._cache: Optional[ScoreCache] = None

    @property
    def cache(self) -> Optional[ScoreCache]:
        return self._cache

    def cached_games(self) -> Tuple[Game, ...]:
        return self._cache.games if self._cache is not None else ()

    def fetch_games(self) -> Tuple[Game, ...]:
        now = self._clock()
        cache = self._cache
        if cache is not None and cache.is_fresh(now):
            return cache.games

        try:
            response = self._session.get(
                self.url,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
            games = parse_scoreboard(data)
        except Exception as exc:
            logging.error("Failed to fetch sports data: %s", exc)
            return self.cached_games()

        self._cache = ScoreCache(games=games, fetched_at=now, ttl=self.ttl)
        logging.info("Fetched %d game(s) from sports feed", len(games))
        return games

