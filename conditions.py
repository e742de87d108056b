"""Baseline station-condition panels and the weather snapshot source.

A snapshot is a plain dict produced by whatever keeps current observations
up to date, for example::

    {
        "station_name": "Chicago O'Hare International Airport",
        "temperature": 72, "temperature_unit": "F",
        "heat_index": None, "wind_chill": None,
        "humidity": 40, "dew_point": 47,
        "wind_speed": 10, "wind_direction": "NW", "wind_unit": "mph", "wind_gust": 0,
        "visibility": 10, "visibility_unit": "mi.",
        "ceiling": 0, "ceiling_unit": "ft.",
    }
"""
from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from panels import PanelProducer

DEGREE = "\N{DEGREE SIGN}"
STATION_NAME_LIMIT = 20

_LOCATION_NOISE = re.compile(
    r"\b(international|regional|municipal|airport|air\s+field|airfield|field)\b",
    re.IGNORECASE,
)


def location_cleanup(name: str) -> str:
    """Drop airport boilerplate from a station name."""

    cleaned = _LOCATION_NOISE.sub(" ", name or "")
    cleaned = re.sub(r"\s*[/,-]\s*$", "", cleaned.strip())
    return re.sub(r"\s+", " ", cleaned).strip()


def _temp(data: Dict[str, Any], key: str) -> str:
    return f"{data.get(key)}{DEGREE}{data.get('temperature_unit', '')}"


def station_panel(data: Dict[str, Any]) -> str:
    name = location_cleanup(str(data.get("station_name") or ""))
    return f"Conditions at {name[:STATION_NAME_LIMIT]}"


def temperature_panel(data: Dict[str, Any]) -> str:
    text = f"Temp: {_temp(data, 'temperature')}"
    if data.get("heat_index"):
        text += f"    Heat Index: {_temp(data, 'heat_index')}"
    elif data.get("wind_chill"):
        text += f"    Wind Chill: {_temp(data, 'wind_chill')}"
    return text


def humidity_panel(data: Dict[str, Any]) -> str:
    return f"Humidity: {data.get('humidity')}%   Dewpoint: {_temp(data, 'dew_point')}"


def wind_panel(data: Dict[str, Any]) -> str:
    speed = data.get("wind_speed") or 0
    if speed > 0:
        text = f"Wind: {data.get('wind_direction')} {speed} {data.get('wind_unit')}"
    else:
        text = "Wind: Calm"
    gust = data.get("wind_gust") or 0
    if gust > 0:
        text += f"  Gusts to {gust}"
    return text


def visibility_panel(data: Dict[str, Any]) -> str:
    ceiling = data.get("ceiling")
    distance = "Unlimited" if ceiling == 0 else f"{ceiling} {data.get('ceiling_unit')}"
    return (
        f"Visib: {data.get('visibility')} {data.get('visibility_unit')}"
        f"  Ceiling: {distance}"
    )


def baseline_producers() -> List[PanelProducer]:
    return [
        station_panel,
        temperature_panel,
        humidity_panel,
        wind_panel,
        visibility_panel,
    ]


class FileSnapshotSource:
    """Serve the current-conditions snapshot from a JSON file.

    The file is re-read only when its modification time changes. A missing or
    malformed file yields ``None`` so the rotation waits for data.
    """

    def __init__(self, path: str):
        self.path = path
        self._mtime: Optional[float] = None
        self._snapshot: Optional[Dict[str, Any]] = None

    def __call__(self) -> Optional[Dict[str, Any]]:
        try:
            mtime = os.path.getmtime(self.path)
        except OSError:
            mtime = None

        if mtime is None:
            if self._mtime is not None:
                logging.warning("Weather snapshot %s disappeared", self.path)
            self._mtime = None
            self._snapshot = None
            return None

        if mtime == self._mtime:
            return self._snapshot

        self._mtime = mtime
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logging.warning("Could not load weather snapshot %s: %s", self.path, exc)
            self._snapshot = None
            return None

        if not isinstance(data, dict):
            logging.warning("Weather snapshot %s must be a JSON object", self.path)
            self._snapshot = None
            return None

        self._snapshot = data
        return data
