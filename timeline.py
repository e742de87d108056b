"""Single cooperative timeline for ticks and periodic jobs.

Every callback registered here runs on the thread that drives the timeline,
so rotation state and the panel registry never need locking. Work finished on
other threads (network fetches) re-enters through :meth:`call_soon_threadsafe`.
Tests drive the same code with a :class:`VirtualClock` and :meth:`advance`.
"""
from __future__ import annotations

import heapq
import itertools
import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional


class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


class VirtualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        if value < self._now:
            raise ValueError("Virtual clock cannot move backwards")
        self._now = float(value)


@dataclass(order=True)
class _Task:
    due: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    interval: Optional[float] = field(default=None, compare=False)
    cancelled: bool = field(default=False, compare=False)


class Timeline:
    def __init__(self, clock=None):
        self.clock = clock or MonotonicClock()
        self._tasks: List[_Task] = []
        self._seq = itertools.count()
        self._incoming: "queue.SimpleQueue[Callable[[], None]]" = queue.SimpleQueue()
        self._wakeup = threading.Event()

    def now(self) -> float:
        return self.clock.now()

    # ─── Scheduling ──────────────────────────────────────────────────────────
    def _push(self, task: _Task) -> _Task:
        heapq.heappush(self._tasks, task)
        self._wakeup.set()
        return task

    def call_later(self, delay: float, callback: Callable[[], None]) -> _Task:
        return self._push(_Task(self.now() + max(delay, 0.0), next(self._seq), callback))

    def call_every(
        self,
        interval: float,
        callback: Callable[[], None],
        *,
        first_delay: Optional[float] = None,
    ) -> _Task:
        if interval <= 0:
            raise ValueError("Interval must be greater than zero")
        delay = interval if first_delay is None else max(first_delay, 0.0)
        return self._push(
            _Task(self.now() + delay, next(self._seq), callback, interval=interval)
        )

    def call_soon_threadsafe(self, callback: Callable[[], None]) -> None:
        """Queue ``callback`` to run on the timeline; safe from any thread."""

        self._incoming.put(callback)
        self._wakeup.set()

    @staticmethod
    def cancel(task: Optional[_Task]) -> None:
        if task is not None:
            task.cancelled = True

    @property
    def pending_count(self) -> int:
        return sum(1 for task in self._tasks if not task.cancelled)

    # ─── Execution ───────────────────────────────────────────────────────────
    def _run_callback(self, callback: Callable[[], None]) -> None:
        try:
            callback()
        except Exception:
            logging.exception("Timeline callback %r failed", callback)

    def run_pending(self) -> int:
        """Run queued thread-safe callbacks and every task that is due."""

        ran = 0
        while True:
            try:
                callback = self._incoming.get_nowait()
            except queue.Empty:
                break
            self._run_callback(callback)
            ran += 1

        now = self.now()
        while self._tasks and self._tasks[0].due <= now:
            task = heapq.heappop(self._tasks)
            if task.cancelled:
                continue
            if task.interval is not None:
                task.due += task.interval
                task.seq = next(self._seq)
                heapq.heappush(self._tasks, task)
            self._run_callback(task.callback)
            ran += 1
        return ran

    def advance(self, seconds: float) -> None:
        """Move a virtual clock forward, running tasks in due order."""

        if not isinstance(self.clock, VirtualClock):
            raise TypeError("advance() requires a VirtualClock")

        target = self.now() + seconds
        self.run_pending()
        while True:
            live = [task for task in self._tasks if not task.cancelled]
            next_due = min((task.due for task in live), default=None)
            if next_due is None or next_due > target:
                break
            self.clock.set(max(next_due, self.now()))
            self.run_pending()
        self.clock.set(target)
        self.run_pending()

    def _seconds_until_next(self) -> Optional[float]:
        live = [task.due for task in self._tasks if not task.cancelled]
        if not live:
            return None
        return max(min(live) - self.now(), 0.0)

    def run_forever(self, stop_event: threading.Event) -> None:
        """Drive the timeline with the real clock until ``stop_event`` is set."""

        while not stop_event.is_set():
            self.run_pending()
            timeout = self._seconds_until_next()
            self._wakeup.clear()
            if not self._incoming.empty():
                continue
            if stop_event.is_set():
                break
            self._wakeup.wait(timeout if timeout is not None else 1.0)
