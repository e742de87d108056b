#!/usr/bin/env python3
"""
render.py

Render strategy and Pillow render sink for ticker panels.

``PanelRenderer`` dispatches each panel kind to the sink and, for scrolling
text, measures the rendered width to work out how long the panel needs to
stay up. ``ImageSink`` draws the one-line ticker strip onto a Pillow canvas
and hands each frame to an output callback.
"""

from __future__ import annotations

import logging
from typing import Callable, List, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from config import (
    BACKGROUND_COLOR,
    FONT_BOLD_PATH,
    FONT_PATH,
    FONT_SIZE,
    HEIGHT,
    ITEM_GAP,
    LIVE_STATUS_COLOR,
    SCROLL_SPEED,
    TEXT_COLOR,
    TICK_SECONDS,
    WIDTH,
)
from logos import LogoCache
from panels import SCROLL, SPORTS, STATUS_FINAL, STATUS_SCHEDULED, Panel, ScoreboardPanel
from scroll_timing import ScrollTiming, compute_scroll_timing


class PanelRenderer:
    """Send panels to ``sink``; returns a dwell override for scroll panels."""

    def __init__(
        self,
        sink,
        *,
        speed: float = SCROLL_SPEED,
        tick_seconds: float = TICK_SECONDS,
    ):
        self.sink = sink
        self._speed = speed
        self._tick_seconds = tick_seconds

    def __call__(self, panel: Panel) -> Optional[int]:
        sink = self.sink
        if sink is None:
            return None

        if panel.kind == SCROLL:
            metrics = sink.measure(panel.text)
            if metrics is None:
                return None
            content_width, container_width = metrics
            timing = compute_scroll_timing(
                content_width,
                container_width,
                speed=self._speed,
                tick_seconds=self._tick_seconds,
            )
            sink.draw_scroll(panel.text, timing)
            return timing.dwell_ticks

        if panel.kind == SPORTS:
            sink.draw_scoreboard(panel)
            return None

        sink.draw_text(panel.text)
        return None


# ─── Pillow sink ──────────────────────────────────────────────────────────────
def _load_font(path: str, size: int):
    try:
        return ImageFont.truetype(path, size)
    except OSError:
        logging.warning("Font not found at %s; using Pillow default", path)
        return ImageFont.load_default()


def measure_text(draw: ImageDraw.ImageDraw, text: str, font) -> Tuple[int, int]:
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    return right - left, bottom - top


class ImageSink:
    """Draws panels onto a ``width`` x ``height`` strip."""

    def __init__(
        self,
        width: int = WIDTH,
        height: int = HEIGHT,
        *,
        output: Optional[Callable[[Image.Image], None]] = None,
        logos: Optional[LogoCache] = None,
        font=None,
        bold_font=None,
    ):
        self.width = width
        self.height = height
        self.font = font or _load_font(FONT_PATH, FONT_SIZE)
        self.bold_font = bold_font or _load_font(FONT_BOLD_PATH, FONT_SIZE)
        self._output = output
        self._logos = logos if logos is not None else LogoCache()
        self._scroll: Optional[Tuple[Image.Image, ScrollTiming]] = None
        self._scroll_elapsed = 0.0
        self.frame: Optional[Image.Image] = None

    def _blank(self) -> Image.Image:
        return Image.new("RGB", (self.width, self.height), BACKGROUND_COLOR)

    def _show(self, image: Image.Image) -> None:
        self.frame = image
        if self._output is not None:
            self._output(image)

    def measure(self, text: str) -> Tuple[int, int]:
        draw = ImageDraw.Draw(self._blank())
        content_width, _ = measure_text(draw, text, self.font)
        return content_width, self.width

    def _text_strip(self, text: str) -> Image.Image:
        content_width, container_width = self.measure(text)
        strip = Image.new("RGB", (max(content_width, container_width), self.height), BACKGROUND_COLOR)
        draw = ImageDraw.Draw(strip)
        _, text_h = measure_text(draw, text, self.font)
        draw.text((0, (self.height - text_h) // 2), text, font=self.font, fill=TEXT_COLOR)
        return strip

    def draw_text(self, text: str) -> None:
        self._scroll = None
        frame = self._blank()
        frame.paste(self._text_strip(text).crop((0, 0, self.width, self.height)), (0, 0))
        self._show(frame)

    def draw_scroll(self, text: str, timing: ScrollTiming) -> None:
        self._scroll = (self._text_strip(text), timing)
        self._scroll_elapsed = 0.0
        self._draw_scroll_frame()

    def advance(self, seconds: float) -> None:
        """Move an active scroll panel along by ``seconds``."""

        if self._scroll is None:
            return
        self._scroll_elapsed += seconds
        self._draw_scroll_frame()

    def _draw_scroll_frame(self) -> None:
        strip, timing = self._scroll
        offset = int(round(timing.offset_at(self._scroll_elapsed)))
        frame = self._blank()
        frame.paste(strip, (offset, 0))
        self._show(frame)

    def _scoreboard_items(self, panel: ScoreboardPanel) -> List[tuple]:
        items: List[tuple] = [("text", f"{panel.league}:", self.bold_font, TEXT_COLOR)]

        def _team(name: str, score: str, logo_url: Optional[str]) -> None:
            logo = self._logos.get(logo_url) if logo_url else None
            if logo is not None:
                items.append(("image", logo))
            label = f"{name} {score}" if panel.shows_scores else name
            items.append(("text", label, self.font, TEXT_COLOR))

        _team(panel.team_a, panel.score_a, panel.logo_a)
        separator = " vs " if panel.status == STATUS_SCHEDULED else ", "
        items.append(("text", separator, self.font, TEXT_COLOR))
        _team(panel.team_b, panel.score_b, panel.logo_b)

        if panel.status == STATUS_FINAL:
            status_text = " - Final"
        elif panel.display_time:
            status_text = f" - {panel.display_time}"
        else:
            status_text = ""
        if status_text:
            if panel.is_live:
                items.append(("text", status_text, self.bold_font, LIVE_STATUS_COLOR))
            else:
                items.append(("text", status_text, self.font, TEXT_COLOR))
        return items

    def draw_scoreboard(self, panel: ScoreboardPanel) -> None:
        self._scroll = None
        frame = self._blank()
        draw = ImageDraw.Draw(frame)
        items = self._scoreboard_items(panel)

        widths = []
        for item in items:
            if item[0] == "image":
                widths.append(item[1].width)
            else:
                widths.append(measure_text(draw, item[1], item[2])[0])
        total = sum(widths) + ITEM_GAP * (len(items) - 1)
        x = max((self.width - total) // 2, 2)

        for item, item_width in zip(items, widths):
            if item[0] == "image":
                logo = item[1]
                y = (self.height - logo.height) // 2
                frame.paste(logo, (x, y), logo if logo.mode == "RGBA" else None)
            else:
                _, text, font, color = item
                _, text_h = measure_text(draw, text, font)
                draw.text((x, (self.height - text_h) // 2), text, font=font, fill=color)
            x += item_width + ITEM_GAP

        self._show(frame)
