"""Tick-driven panel rotation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from config import DEFAULT_DWELL_TICKS, TICK_SECONDS
from panel_registry import PanelRegistry
from panels import produce_panel
from timeline import Timeline

# Gate id reported while the page-progress view is on screen; stopping for it
# also rewinds the rotation to the first panel.
PROGRESS_DISPLAY_ID = "progress"


@dataclass(frozen=True)
class DisplayStatus:
    eligible: bool
    id: str = ""


class DisplayGate:
    """Holds whatever the navigation layer last reported as on screen."""

    def __init__(self, status: Optional[DisplayStatus] = None):
        self._status = status

    def set(self, status: Optional[DisplayStatus]) -> None:
        self._status = status

    def __call__(self) -> Optional[DisplayStatus]:
        return self._status


class RotationScheduler:
    """Advances through the registry one panel per dwell period.

    ``tick`` is called every ``TICK_SECONDS`` by the timeline. A panel stays up
    for ``dwell_ticks`` ticks; scroll panels replace that with their own
    computed dwell for the one cycle they are shown.
    """

    def __init__(
        self,
        registry: PanelRegistry,
        *,
        gate: Callable[[], Optional[DisplayStatus]],
        snapshot_source: Callable[[], Any],
        render: Callable[[Any], Optional[int]],
        timeline: Timeline,
        default_dwell: int = DEFAULT_DWELL_TICKS,
        tick_seconds: float = TICK_SECONDS,
    ):
        self.registry = registry
        self._gate = gate
        self._snapshot_source = snapshot_source
        self._render = render
        self._timeline = timeline
        self._tick_seconds = tick_seconds
        self.default_dwell = max(int(default_dwell), 1)

        self.current_index = 0
        self.elapsed_ticks = 0
        self.dwell_ticks = self.default_dwell
        self.running = False
        self._tick_task = None

    @property
    def count(self) -> int:
        return len(self.registry)

    # ─── Control ─────────────────────────────────────────────────────────────
    def start(self) -> None:
        if self._tick_task is None:
            self._tick_task = self._timeline.call_every(self._tick_seconds, self._on_clock)
        self.running = True
        self.draw_screen()

    def stop(self, reset: bool = False) -> None:
        self.running = False
        if reset:
            self.current_index = 0

    def clamp_index(self) -> None:
        """Keep the index inside the registry after it has been truncated."""

        if self.current_index >= self.count:
            self.current_index = self.count - 1

    def _on_clock(self) -> None:
        if self.running:
            self.tick()

    # ─── Ticking ─────────────────────────────────────────────────────────────
    def tick(self, force: bool = False) -> None:
        if not force:
            self.elapsed_ticks += 1
            if self.elapsed_ticks < self.dwell_ticks:
                return

        # Invalid panels are skipped within this call, at most one lap.
        for _ in range(self.count):
            self.elapsed_ticks = 0
            self.dwell_ticks = self.default_dwell

            display = self._gate()
            if display is None or not display.eligible:
                self.stop(reset=display is not None and display.id == PROGRESS_DISPLAY_ID)
                return

            self.current_index = (self.current_index + 1) % self.count
            if self._show_current():
                return
            logging.debug("Panel %d produced nothing displayable; skipping", self.current_index)

        logging.warning(
            "No displayable panel in %d producer(s); waiting for the next dwell period",
            self.count,
        )

    def draw_screen(self) -> None:
        if not self._show_current():
            logging.debug("Panel %d produced nothing displayable; skipping", self.current_index)
            self.tick(force=True)

    def _show_current(self) -> bool:
        """Draw the current panel; ``False`` when it has nothing to show."""

        snapshot = self._snapshot_source()
        # No data yet; the index has already moved on and stays there.
        if snapshot is None:
            return True

        self.clamp_index()
        producer = self.registry[self.current_index]
        panel = produce_panel(producer, snapshot)
        if panel is None:
            return False

        dwell_override = self._render(panel)
        if dwell_override is not None:
            self.dwell_ticks = max(int(dwell_override), 1)
        return True
