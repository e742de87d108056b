"""Lazy-loading helpers for team logos on scoreboard panels.

Logos are downloaded and resized the first time a scoreboard needs them. A
logo that cannot be fetched or decoded is remembered as missing so the
scoreboard simply draws without it.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from io import BytesIO
from typing import Dict, Iterator, Optional

import requests
from PIL import Image

import config


def _load_logo(
    session: requests.Session, url: str, *, height: int = config.LOGO_SIZE
) -> Optional[Image.Image]:
    try:
        response = session.get(url, timeout=config.REQUEST_TIMEOUT)
        response.raise_for_status()
        with Image.open(BytesIO(response.content)) as img:
            img = img.convert("RGBA")
            ratio = height / float(img.height) if img.height else 1
            target_h = max(1, int(round(img.height * ratio))) if img.height else height
            target_w = max(1, int(round(img.width * ratio))) if img.width else height
            resized = img.resize((target_w, target_h), Image.LANCZOS)
        return resized
    except Exception as exc:
        logging.warning("Logo load failed '%s': %s", url, exc)
        return None


class LogoCache(Mapping[str, Optional[Image.Image]]):
    """Dictionary-like container that lazy-loads and caches logos by URL."""

    def __init__(self, session: Optional[requests.Session] = None, *, height: int = config.LOGO_SIZE):
        self._session = session or requests.Session()
        self._height = height
        self._cache: Dict[str, Optional[Image.Image]] = {}

    def _load(self, url: str) -> Optional[Image.Image]:
        if url in self._cache:
            return self._cache[url]
        logo = _load_logo(self._session, url, height=self._height)
        self._cache[url] = logo
        return logo

    def get(self, url, default=None):  # type: ignore[override]
        if not url:
            return default
        logo = self._load(url)
        return default if logo is None else logo

    def __getitem__(self, url: str) -> Optional[Image.Image]:
        if not url:
            raise KeyError(url)
        return self._load(url)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cache)

    def __len__(self) -> int:
        return len(self._cache)
