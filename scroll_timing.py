"""Dwell and animation timing for scrolling text panels."""
from __future__ import annotations

import math
from dataclasses import dataclass

from config import SCROLL_PAD_TICKS, SCROLL_SPEED, SCROLL_START_DELAY, TICK_SECONDS


@dataclass(frozen=True)
class ScrollTiming:
    """Geometry of one scroll pass.

    Attributes
    ----------
    scroll_distance:
        Pixels the content moves left; zero when it already fits.
    duration:
        Seconds the motion takes at the configured speed.
    dwell_ticks:
        Ticks the panel should stay on screen, including the pause before
        motion starts and the pause after the tail comes into view.
    start_delay:
        Seconds the content stays at ``start_offset`` before moving.
    """

    scroll_distance: float
    duration: float
    dwell_ticks: int
    start_delay: float = SCROLL_START_DELAY

    @property
    def start_offset(self) -> float:
        return 0.0

    @property
    def end_offset(self) -> float:
        return -self.scroll_distance

    def offset_at(self, elapsed: float) -> float:
        """Horizontal offset ``elapsed`` seconds after the panel was drawn."""

        moving = elapsed - self.start_delay
        if moving <= 0 or self.duration <= 0:
            return self.start_offset
        if moving >= self.duration:
            return self.end_offset
        return self.start_offset + (self.end_offset - self.start_offset) * (moving / self.duration)


def compute_scroll_timing(
    content_width: float,
    container_width: float,
    speed: float = SCROLL_SPEED,
    tick_seconds: float = TICK_SECONDS,
) -> ScrollTiming:
    scroll_distance = max(content_width - container_width, 0)
    duration = scroll_distance / speed
    dwell_ticks = int(round(math.ceil(duration / tick_seconds) + SCROLL_PAD_TICKS))
    return ScrollTiming(
        scroll_distance=scroll_distance,
        duration=duration,
        dwell_ticks=dwell_ticks,
    )
