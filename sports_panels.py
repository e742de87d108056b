"""Turn normalised games into rotation panel producers."""
from __future__ import annotations

from typing import Iterable, List

from config import LIVE_SCROLL_THRESHOLD, SCROLL_THRESHOLD
from data_fetch import Game
from panels import (
    STATUS_FINAL,
    STATUS_LIVE,
    STATUS_SCHEDULED,
    Panel,
    PanelProducer,
    PlainPanel,
    ScoreboardPanel,
    ScrollPanel,
)


def format_status_line(game: Game) -> str:
    if game.status == STATUS_FINAL:
        return (
            f"{game.league}: {game.team_a} {game.score_a}, "
            f"{game.team_b} {game.score_b} - Final"
        )
    if game.status == STATUS_LIVE:
        return (
            f"{game.league}: {game.team_a} {game.score_a}, "
            f"{game.team_b} {game.score_b} - {game.display_time}"
        )
    if game.status == STATUS_SCHEDULED:
        text = f"{game.league}: {game.team_a} vs {game.team_b}"
        if game.display_time:
            text += f" - {game.display_time}"
        return text
    return ""


def build_game_panel(game: Game) -> Panel:
    text = format_status_line(game)

    if game.logo_a or game.logo_b:
        return ScoreboardPanel(
            league=game.league,
            team_a=game.team_a,
            team_b=game.team_b,
            score_a=game.score_a,
            score_b=game.score_b,
            status=game.status,
            display_time=game.display_time,
            is_live=game.is_live,
            text=text,
            logo_a=game.logo_a,
            logo_b=game.logo_b,
        )

    # Long lines, or live lines that will keep changing, scroll instead of clipping.
    if (game.is_live and len(text) > LIVE_SCROLL_THRESHOLD) or len(text) > SCROLL_THRESHOLD:
        return ScrollPanel(text)
    return PlainPanel(text)


def _game_producer(game: Game) -> PanelProducer:
    def _producer(_snapshot=None) -> Panel:
        return build_game_panel(game)

    return _producer


def create_sports_producers(games: Iterable[Game]) -> List[PanelProducer]:
    return [_game_producer(game) for game in games]
