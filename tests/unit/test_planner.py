from __future__ import annotations

from datetime import timedelta

import pytest

from graphite_adapter.timeseries.planner import plan_band_windows

HOUR = timedelta(hours=1)


def test_band_windows_step_back_one_period_each(now):
    windows = plan_band_windows(now=now, duration=HOUR, period=HOUR, num=3)
    assert [(w.start, w.end) for w in windows] == [
        (now - 2 * HOUR, now - HOUR),
        (now - 3 * HOUR, now - 2 * HOUR),
        (now - 4 * HOUR, now - 3 * HOUR),
    ]
    assert [w.index for w in windows] == [0, 1, 2]


def test_band_windows_may_overlap_when_duration_exceeds_period(now):
    windows = plan_band_windows(now=now, duration=3 * HOUR, period=HOUR, num=2)
    assert windows[0].start == now - 4 * HOUR
    assert windows[1].end == now - 2 * HOUR


@pytest.mark.parametrize("num", [0, 101])
def test_band_windows_reject_out_of_range_num(now, num):
    with pytest.raises(ValueError):
        plan_band_windows(now=now, duration=HOUR, period=HOUR, num=num)
