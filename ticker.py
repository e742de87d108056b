"""Conditions ticker engine.

Owns the rotation state, the panel registry and the score cache, and exposes
the control surface used by the rest of the display: ``start``, ``stop``,
``add_screen``, ``reset``, ``add_sports_to_rotation``,
``start_sports_updates`` and ``fetch_sports_data``.

Feed requests run on a worker pool so ticks keep firing while a fetch is in
flight; the result is applied back on the timeline. Refreshes are not
serialised: if two fetches overlap, whichever finishes last decides the
sports panels in the rotation.
"""
from __future__ import annotations

import functools
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional, Sequence, Tuple

from conditions import baseline_producers
from config import SPORTS_REFRESH_MINUTES
from data_fetch import Game, ScoreFeed
from panel_registry import PanelRegistry
from panels import PanelProducer
from render import PanelRenderer
from rotation import DisplayStatus, RotationScheduler
from sports_panels import create_sports_producers
from timeline import Timeline


class ConditionsTicker:
    def __init__(
        self,
        *,
        gate: Callable[[], Optional[DisplayStatus]],
        snapshot_source: Callable[[], Any],
        sink=None,
        feed: Optional[ScoreFeed] = None,
        timeline: Optional[Timeline] = None,
        executor=None,
        baseline: Optional[Sequence[PanelProducer]] = None,
        refresh_interval: float = SPORTS_REFRESH_MINUTES * 60,
    ):
        self.timeline = timeline or Timeline()
        self.registry = PanelRegistry(baseline if baseline is not None else baseline_producers())
        self.feed = feed or ScoreFeed(clock=self.timeline.now)
        self.renderer = PanelRenderer(sink)
        self.scheduler = RotationScheduler(
            self.registry,
            gate=gate,
            snapshot_source=snapshot_source,
            render=self.renderer,
            timeline=self.timeline,
        )
        self.refresh_interval = refresh_interval
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="sports-fetch"
        )
        self._refresh_task = None

    # ─── Rotation control ────────────────────────────────────────────────────
    def start(self) -> None:
        self.scheduler.start()

    def stop(self, reset: bool = False) -> None:
        self.scheduler.stop(reset)

    def add_screen(self, producer: PanelProducer) -> None:
        self.registry.add_screen(producer)

    def reset(self) -> None:
        self.registry.reset()
        self.scheduler.clamp_index()

    # ─── Sports ──────────────────────────────────────────────────────────────
    def fetch_sports_data(self) -> Future:
        """Fetch games on the worker pool without touching the rotation.

        Meant for inspection; the returned future resolves to the games tuple.
        """

        return self._executor.submit(self.feed.fetch_games)

    def add_sports_to_rotation(self) -> Future:
        """Fetch games and append their panels without touching existing ones."""

        return self._submit_fetch(self._append_games)

    def refresh_sports(self) -> Future:
        """Fetch games and replace any previously added sports panels."""

        return self._submit_fetch(self._replace_games)

    def start_sports_updates(self) -> None:
        if self._refresh_task is not None:
            return
        self.refresh_sports()
        self._refresh_task = self.timeline.call_every(self.refresh_interval, self.refresh_sports)

    def shutdown(self) -> None:
        Timeline.cancel(self._refresh_task)
        self._refresh_task = None
        self._executor.shutdown(wait=False)

    # ─── Internals ───────────────────────────────────────────────────────────
    def _submit_fetch(self, apply: Callable[[Tuple[Game, ...]], None]) -> Future:
        future = self._executor.submit(self.feed.fetch_games)

        def _done(fut: Future) -> None:
            self.timeline.call_soon_threadsafe(functools.partial(self._apply_result, fut, apply))

        future.add_done_callback(_done)
        return future

    def _apply_result(self, future: Future, apply: Callable[[Tuple[Game, ...]], None]) -> None:
        try:
            games = future.result()
        except Exception as exc:
            logging.error("Failed to add sports to rotation: %s", exc)
            return

        if not games:
            logging.info("No sports data available")
            return
        apply(games)

    def _append_games(self, games: Iterable[Game]) -> None:
        producers = create_sports_producers(games)
        for producer in producers:
            self.add_screen(producer)
        logging.info("Added %d sports screen(s) to rotation", len(producers))

    def _replace_games(self, games: Iterable[Game]) -> None:
        self.reset()
        self._append_games(games)
