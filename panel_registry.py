"""Ordered list of panel producers with a fixed baseline."""
from __future__ import annotations

from typing import Iterator, List, Sequence

from panels import PanelProducer


class PanelRegistry:
    """Producers shown by the rotation.

    The first ``baseline_count`` producers are fixed at construction; anything
    added afterwards is dropped again by :meth:`reset`.
    """

    def __init__(self, baseline: Sequence[PanelProducer]):
        producers = list(baseline)
        if not producers:
            raise ValueError("Panel registry requires at least one baseline producer")
        self._producers: List[PanelProducer] = producers
        self._baseline_count = len(producers)

    @property
    def baseline_count(self) -> int:
        return self._baseline_count

    @property
    def added_count(self) -> int:
        return len(self._producers) - self._baseline_count

    def reset(self) -> None:
        del self._producers[self._baseline_count:]

    def add_screen(self, producer: PanelProducer) -> None:
        self._producers.append(producer)

    def __len__(self) -> int:
        return len(self._producers)

    def __getitem__(self, index: int) -> PanelProducer:
        return self._producers[index]

    def __iter__(self) -> Iterator[PanelProducer]:
        return iter(list(self._producers))
