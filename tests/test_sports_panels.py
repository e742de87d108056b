"""Tests for turning games into rotation panels."""

from data_fetch import Game
from panels import PlainPanel, ScoreboardPanel, ScrollPanel
from sports_panels import build_game_panel, create_sports_producers, format_status_line


def _game(status="Final", display_time="", **overrides):
    fields = dict(
        league="NBA",
        team_a="Golden State Warriors",
        team_b="Chicago",
        score_a="101",
        score_b="98",
        status=status,
        display_time=display_time,
    )
    fields.update(overrides)
    return Game(**fields)


def test_status_lines_per_status():
    assert format_status_line(_game("Final")) == "NBA: Golden State Warriors 101, Chicago 98 - Final"
    assert (
        format_status_line(_game("Live", "2nd Q"))
        == "NBA: Golden State Warriors 101, Chicago 98 - 2nd Q"
    )
    assert format_status_line(_game("Scheduled", team_a="LAL", team_b="BOS")) == "NBA: LAL vs BOS"
    assert (
        format_status_line(_game("Scheduled", "7:30 PM", team_a="LAL", team_b="BOS"))
        == "NBA: LAL vs BOS - 7:30 PM"
    )


def test_fifty_character_final_is_plain():
    game = _game("Final")
    line = format_status_line(game)
    assert len(line) == 50

    assert build_game_panel(game) == PlainPanel(line)


def test_fifty_character_live_line_scrolls():
    game = _game("Live", "2nd Q")
    line = format_status_line(game)
    assert len(line) == 50

    assert build_game_panel(game) == ScrollPanel(line)


def test_short_live_line_stays_plain():
    game = _game("Live", "Q1", team_a="LAL", team_b="BOS")
    assert isinstance(build_game_panel(game), PlainPanel)


def test_very_long_line_scrolls_even_when_not_live():
    game = _game(
        "Scheduled",
        "7:30 PM",
        league="PGA",
        team_a="Scottie Scheffler Jr. the Third",
        team_b="Rory McIlroy of Holywood",
    )
    assert len(format_status_line(game)) > 60
    assert isinstance(build_game_panel(game), ScrollPanel)


def test_any_logo_makes_a_scoreboard():
    game = _game("Live", "2nd Q", logo_b="https://a.espncdn.com/chi.png")

    panel = build_game_panel(game)

    assert isinstance(panel, ScoreboardPanel)
    assert panel.kind == "sports"
    assert panel.is_live
    assert panel.logo_a is None
    assert panel.logo_b == "https://a.espncdn.com/chi.png"
    assert (panel.team_a, panel.score_a, panel.team_b, panel.score_b) == (
        "Golden State Warriors",
        "101",
        "Chicago",
        "98",
    )
    assert panel.text == format_status_line(game)
    assert panel.shows_scores


def test_scheduled_scoreboard_hides_scores():
    panel = build_game_panel(_game("Scheduled", logo_a="https://a.espncdn.com/gsw.png"))
    assert not panel.shows_scores


def test_producers_ignore_snapshot_and_keep_order():
    games = [_game("Final"), _game("Scheduled", team_a="LAL", team_b="BOS")]

    producers = create_sports_producers(games)

    assert len(producers) == 2
    assert producers[0](None) == producers[0]({"temperature": 70})
    assert producers[1](None) == PlainPanel("NBA: LAL vs BOS")


def test_status_values_are_shared_with_panels():
    import panels

    assert _game(panels.STATUS_LIVE, "Q1").is_live
    board = ScoreboardPanel(
        league="NBA",
        team_a="LAL",
        team_b="BOS",
        score_a="1",
        score_b="0",
        status=panels.STATUS_FINAL,
        display_time="",
        is_live=False,
    )
    assert board.shows_scores
