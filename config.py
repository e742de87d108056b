# config.py

#!/usr/bin/env python3
import logging
import os
from pathlib import Path
from typing import Optional, Tuple

import pytz
from dotenv import load_dotenv

# ─── Environment helpers ───────────────────────────────────────────────────────

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))

_ENV_LOADED = False


def _should_load_env() -> bool:
    """Return ``True`` when dotenv files should be loaded."""

    if os.environ.get("TICKER_SKIP_DOTENV"):
        return False

    # Skip filesystem scans when running under pytest to keep test startup fast.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return False

    return True


def load_environment() -> None:
    """Load environment variables from `.env` files once, if allowed."""

    global _ENV_LOADED

    if _ENV_LOADED or not _should_load_env():
        return

    candidate_paths = [Path(SCRIPT_DIR) / ".env"]
    cwd_path = Path.cwd() / ".env"
    if cwd_path != candidate_paths[0]:
        candidate_paths.append(cwd_path)

    for path in candidate_paths:
        if not path.is_file():
            continue
        try:
            load_dotenv(path, override=False)
        except Exception as exc:  # pragma: no cover - depends on filesystem
            logging.warning("Failed to load %s: %s", path, exc)

    _ENV_LOADED = True


load_environment()


def _int_from_env(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = int(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %d", name, raw_value, default)
        return default
    if value <= 0:
        logging.warning("%s must be greater than zero; using default %d", name, default)
        return default
    return value


def _float_from_env(name: str, default: float) -> float:
    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        value = float(raw_value)
    except (TypeError, ValueError):
        logging.warning("Invalid %s value %r; using default %s", name, raw_value, default)
        return default
    if value <= 0:
        logging.warning("%s must be greater than zero; using default %s", name, default)
        return default
    return value


def _optional_path_from_env(name: str) -> Optional[str]:
    raw_value = (os.environ.get(name) or "").strip()
    if not raw_value:
        return None
    return os.path.expanduser(raw_value)


def _load_timezone(name: str):
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logging.warning("Unknown TIMEZONE %r; falling back to America/New_York", name)
        return pytz.timezone("America/New_York")


# ─── Rotation timing ──────────────────────────────────────────────────────────
TICK_SECONDS         = _float_from_env("TICK_SECONDS", 0.5)
DEFAULT_DWELL_TICKS  = _int_from_env("DEFAULT_DWELL_TICKS", 8)   # 4 seconds at 0.5s ticks
SCROLL_SPEED         = _float_from_env("SCROLL_SPEED", 75.0)     # pixels/second
SCROLL_START_DELAY   = _float_from_env("SCROLL_START_DELAY", 1.0)  # pause before motion starts
SCROLL_PAD_TICKS     = 4

# ─── Sports feed ──────────────────────────────────────────────────────────────
SPORTS_FEED_URL = os.environ.get(
    "SPORTS_FEED_URL",
    "https://site.api.espn.com/apis/personalized/v2/scoreboard/header"
    "?configuration=SITE_DEFAULT&lang=en&region=us&contentorigin=espn"
    "&tz=America%2FNew_York&platform=web",
)
SPORTS_CACHE_MINUTES   = _int_from_env("SPORTS_CACHE_MINUTES", 10)
SPORTS_REFRESH_MINUTES = _int_from_env("SPORTS_REFRESH_MINUTES", 5)
SPORTS_WARMUP_SECONDS  = _float_from_env("SPORTS_WARMUP_SECONDS", 2.0)
REQUEST_TIMEOUT        = _int_from_env("REQUEST_TIMEOUT", 10)

SUPPORTED_LEAGUES: Tuple[str, ...] = ("MLB", "NBA", "NFL", "NHL", "PGA")
PLACEHOLDER_TEAM = "TBD"

LIVE_SCROLL_THRESHOLD = 45
SCROLL_THRESHOLD      = 60

TIMEZONE = _load_timezone(os.environ.get("TIMEZONE", "America/New_York"))

# ─── Display geometry & fonts ─────────────────────────────────────────────────
WIDTH  = _int_from_env("DISPLAY_WIDTH", 640)
HEIGHT = _int_from_env("DISPLAY_HEIGHT", 40)

FONTS_DIR  = os.path.join(SCRIPT_DIR, "fonts")
FONT_PATH  = os.environ.get("FONT_PATH", os.path.join(FONTS_DIR, "DejaVuSansMono.ttf"))
FONT_BOLD_PATH = os.environ.get(
    "FONT_BOLD_PATH", os.path.join(FONTS_DIR, "DejaVuSansMono-Bold.ttf")
)
FONT_SIZE  = _int_from_env("FONT_SIZE", 28)
LOGO_SIZE  = _int_from_env("LOGO_SIZE", 22)
ITEM_GAP   = 8

TEXT_COLOR       = (255, 255, 255)
LIVE_STATUS_COLOR = (255, 107, 107)   # #ff6b6b
BACKGROUND_COLOR = (0, 0, 0)

# ─── External inputs / outputs ────────────────────────────────────────────────
WEATHER_SNAPSHOT_PATH = _optional_path_from_env("WEATHER_SNAPSHOT_PATH") or os.path.join(
    SCRIPT_DIR, "current_conditions.json"
)
FRAME_OUTPUT_PATH = _optional_path_from_env("FRAME_OUTPUT_PATH")

LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
