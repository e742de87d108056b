"""Tests for the tick-driven rotation scheduler."""

from panel_registry import PanelRegistry
from panels import PlainPanel, ScrollPanel
from rotation import DisplayGate, DisplayStatus, RotationScheduler
from timeline import Timeline, VirtualClock


def _text(text):
    return lambda _snapshot: text


def _build(producers, *, gate=None, snapshot=lambda: {}, override=None):
    timeline = Timeline(VirtualClock())
    shown = []

    def _render(panel):
        shown.append(panel)
        return override(panel) if override else None

    scheduler = RotationScheduler(
        PanelRegistry(producers),
        gate=gate or DisplayGate(DisplayStatus(eligible=True, id="conditions")),
        snapshot_source=snapshot,
        render=_render,
        timeline=timeline,
        default_dwell=8,
        tick_seconds=0.5,
    )
    return scheduler, timeline, shown


def test_start_draws_first_panel_and_is_idempotent():
    scheduler, timeline, shown = _build([_text("a"), _text("b")])

    scheduler.start()
    scheduler.start()

    assert scheduler.running
    assert scheduler.current_index == 0
    assert shown == [PlainPanel("a"), PlainPanel("a")]
    assert timeline.pending_count == 1


def test_panel_changes_only_after_dwell():
    scheduler, timeline, shown = _build([_text("a"), _text("b")])
    scheduler.start()

    timeline.advance(0.5 * 7)
    assert scheduler.current_index == 0
    assert scheduler.elapsed_ticks == 7

    timeline.advance(0.5)
    assert scheduler.current_index == 1
    assert scheduler.elapsed_ticks == 0
    assert shown[-1] == PlainPanel("b")


def test_index_wraps_and_stays_in_range():
    scheduler, _timeline, _shown = _build([_text("a"), _text("b"), _text("c")])
    scheduler.running = True

    seen = []
    for _ in range(8 * 7):
        before = scheduler.current_index
        elapsed_before = scheduler.elapsed_ticks
        scheduler.tick()
        assert 0 <= scheduler.current_index < scheduler.count
        if scheduler.current_index != before:
            assert elapsed_before + 1 >= 8
            seen.append(scheduler.current_index)

    assert seen == [1, 2, 0, 1, 2, 0, 1]


def test_index_stays_valid_when_registry_shrinks():
    scheduler, _timeline, _shown = _build([_text("a"), _text("b")])
    for idx in range(4):
        scheduler.registry.add_screen(_text(f"extra {idx}"))
    scheduler.current_index = 5

    scheduler.registry.reset()
    scheduler.clamp_index()

    assert scheduler.current_index == 1
    scheduler.tick(force=True)
    assert scheduler.current_index == 0


def test_invalid_panel_is_skipped_immediately():
    def broken(_snapshot):
        raise KeyError("station")

    scheduler, _timeline, shown = _build([_text("a"), lambda _s: None, broken, _text("d")])
    scheduler.start()

    for _ in range(8):
        scheduler.tick()

    assert scheduler.current_index == 3
    assert shown == [PlainPanel("a"), PlainPanel("d")]
    assert scheduler.elapsed_ticks == 0


def test_unknown_output_shape_counts_as_invalid():
    scheduler, _timeline, shown = _build([_text("a"), lambda _s: {"type": "bogus"}, _text("c")])
    scheduler.start()
    for _ in range(8):
        scheduler.tick()

    assert shown[-1] == PlainPanel("c")


def test_all_invalid_producers_do_not_recurse_forever():
    scheduler, timeline, shown = _build([lambda _s: None, lambda _s: 42])

    scheduler.start()
    timeline.advance(10)

    assert shown == []
    assert 0 <= scheduler.current_index < scheduler.count
    assert scheduler.running


def test_missing_snapshot_still_advances_index():
    scheduler, _timeline, shown = _build([_text("a"), _text("b"), _text("c")], snapshot=lambda: None)
    scheduler.start()

    for _ in range(8):
        scheduler.tick()

    assert scheduler.current_index == 1
    assert shown == []


def test_ineligible_display_stops_without_reset():
    gate = DisplayGate(DisplayStatus(eligible=True, id="conditions"))
    scheduler, timeline, _shown = _build([_text("a"), _text("b"), _text("c")], gate=gate)
    scheduler.start()
    timeline.advance(4.0)
    assert scheduler.current_index == 1

    gate.set(DisplayStatus(eligible=False, id="radar"))
    timeline.advance(4.0)

    assert not scheduler.running
    assert scheduler.current_index == 1

    # No further ticks take effect while stopped.
    timeline.advance(20.0)
    assert scheduler.current_index == 1


def test_progress_display_stops_and_rewinds():
    gate = DisplayGate(DisplayStatus(eligible=True, id="conditions"))
    scheduler, timeline, _shown = _build([_text("a"), _text("b"), _text("c")], gate=gate)
    scheduler.start()
    timeline.advance(8.0)
    assert scheduler.current_index == 2

    gate.set(DisplayStatus(eligible=False, id="progress"))
    timeline.advance(4.0)

    assert not scheduler.running
    assert scheduler.current_index == 0


def test_missing_display_status_stops():
    scheduler, _timeline, _shown = _build([_text("a"), _text("b")], gate=lambda: None)
    scheduler.running = True
    scheduler.current_index = 1

    scheduler.tick(force=True)

    assert not scheduler.running
    assert scheduler.current_index == 1


def test_restart_after_stop_resumes_from_current_index():
    gate = DisplayGate(DisplayStatus(eligible=False, id="radar"))
    scheduler, timeline, shown = _build([_text("a"), _text("b")], gate=gate)
    scheduler.start()
    timeline.advance(4.0)
    assert not scheduler.running

    gate.set(DisplayStatus(eligible=True, id="conditions"))
    scheduler.start()
    timeline.advance(4.0)

    assert scheduler.running
    assert scheduler.current_index == 1
    assert timeline.pending_count == 1
    assert shown[-1] == PlainPanel("b")


def test_scroll_override_applies_for_one_cycle():
    def _override(panel):
        return 12 if isinstance(panel, ScrollPanel) else None

    scheduler, _timeline, shown = _build(
        [lambda _s: ScrollPanel("long text"), _text("b")],
        override=_override,
    )
    scheduler.start()
    assert scheduler.dwell_ticks == 12

    for _ in range(11):
        scheduler.tick()
    assert scheduler.current_index == 0

    scheduler.tick()
    assert scheduler.current_index == 1
    assert scheduler.dwell_ticks == 8
    assert shown[-1] == PlainPanel("b")


def test_long_run_of_invalid_panels_is_skipped_in_one_tick():
    producers = [_text("only")] + [lambda _s: None] * 400
    scheduler, _timeline, shown = _build(producers)
    scheduler.running = True

    scheduler.tick(force=True)

    assert scheduler.current_index == 0
    assert shown == [PlainPanel("only")]


def test_start_with_long_invalid_registry_waits_quietly(caplog):
    scheduler, timeline, shown = _build([lambda _s: None] * 500)

    scheduler.start()
    timeline.advance(4.0)

    assert shown == []
    assert scheduler.running
    assert "No displayable panel in 500 producer(s)" in caplog.text
