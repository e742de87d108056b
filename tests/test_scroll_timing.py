"""Tests for scroll dwell and offset calculations."""

import pytest

from scroll_timing import compute_scroll_timing


def test_scroll_timing_for_wide_content():
    timing = compute_scroll_timing(500, 200, speed=75, tick_seconds=0.5)

    assert timing.scroll_distance == 300
    assert timing.duration == pytest.approx(4.0)
    assert timing.dwell_ticks == 12
    assert timing.start_offset == 0
    assert timing.end_offset == -300


@pytest.mark.parametrize("content_width", [0, 150, 200])
def test_content_that_fits_still_gets_minimum_dwell(content_width):
    timing = compute_scroll_timing(content_width, 200, speed=75, tick_seconds=0.5)

    assert timing.scroll_distance == 0
    assert timing.duration == 0
    assert timing.dwell_ticks == 4


def test_partial_tick_rounds_up():
    # 100px at 75px/s is 1.33s, which needs three half-second ticks.
    timing = compute_scroll_timing(300, 200, speed=75, tick_seconds=0.5)
    assert timing.dwell_ticks == 3 + 4


def test_offset_waits_for_start_delay_then_moves_linearly():
    timing = compute_scroll_timing(500, 200, speed=75, tick_seconds=0.5)

    assert timing.offset_at(0.0) == 0
    assert timing.offset_at(timing.start_delay) == 0
    assert timing.offset_at(timing.start_delay + 2.0) == pytest.approx(-150)
    assert timing.offset_at(timing.start_delay + 10.0) == -300


def test_offset_stays_put_without_scroll_distance():
    timing = compute_scroll_timing(100, 200)
    assert timing.offset_at(5.0) == 0
