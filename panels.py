"""Panel values produced for one rotation slot."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

PLAIN = "plain"
SCROLL = "scroll"
SPORTS = "sports"

STATUS_SCHEDULED = "Scheduled"
STATUS_LIVE = "Live"
STATUS_FINAL = "Final"


@dataclass(frozen=True)
class PlainPanel:
    text: str

    kind = PLAIN


@dataclass(frozen=True)
class ScrollPanel:
    text: str

    kind = SCROLL


@dataclass(frozen=True)
class ScoreboardPanel:
    """Structured live-score panel.

    ``text`` carries the formatted one-line status so sinks that cannot draw
    logos still have something to show.
    """

    league: str
    team_a: str
    team_b: str
    score_a: str
    score_b: str
    status: str
    display_time: str
    is_live: bool
    text: str = ""
    logo_a: Optional[str] = None
    logo_b: Optional[str] = None

    kind = SPORTS

    @property
    def shows_scores(self) -> bool:
        return self.status in (STATUS_FINAL, STATUS_LIVE)


Panel = Union[PlainPanel, ScrollPanel, ScoreboardPanel]

# A producer takes the latest weather snapshot (possibly unused) and returns a
# Panel, a bare string (shorthand for PlainPanel) or ``None`` when it has
# nothing to show.
PanelProducer = Callable[[Any], Any]

_PANEL_TYPES = (PlainPanel, ScrollPanel, ScoreboardPanel)


def as_panel(value: Any) -> Optional[Panel]:
    """Return ``value`` as a Panel, or ``None`` when it is not displayable."""

    if isinstance(value, _PANEL_TYPES):
        return value
    if isinstance(value, str):
        return PlainPanel(value)
    return None


def produce_panel(producer: PanelProducer, snapshot: Any) -> Optional[Panel]:
    """Run ``producer`` and classify its output.

    A producer that raises is treated the same as one returning an unknown
    value so the rotation can move on to the next slot.
    """

    try:
        value = producer(snapshot)
    except Exception as exc:
        logging.warning("Panel producer %r failed: %s", producer, exc)
        return None
    return as_panel(value)
