from datetime import datetime

import pytest

from sampler.domain import stats


@pytest.mark.parametrize(
    "current, previous, expected",
    [(0, 0, 0), (10, 0, 100), (15, 10, 50), (5, 10, -50), (1, 3, -67), (7, 8, -12)],
)
def test_calculate_change(current, previous, expected):
    assert stats.calculate_change(current, previous) == expected


def test_change_rounds_half_up():
    # (1 - 8) / 8 * 100 == -87.5
    assert stats.calculate_change(1, 8) == -87


def test_average_points_guards_zero_users():
    assert stats.average_points(500, 0) == 0
    assert stats.average_points(500, 3) == 167


@pytest.mark.parametrize(
    "points, expected",
    [
        (0, (1, "NewbieSampler")),
        (999, (1, "NewbieSampler")),
        (1000, (2, "SampleFan")),
        (5000, (3, "SuperSampler")),
        (25000, (4, "VIS")),
        (250000, (5, "SampleMaster")),
    ],
)
def test_tier_thresholds(points, expected):
    assert stats.tier_from_points(points) == expected


def test_week_starts_on_monday():
    sunday = datetime(2026, 10, 18, 15, 30)
    start, end = stats.this_week_range(sunday)
    assert start == datetime(2026, 10, 12)
    assert end.date() == sunday.date()
    assert (end.hour, end.minute) == (23, 59)


def test_month_ranges_cross_year_boundary():
    now = datetime(2026, 1, 14, 9, 0)
    start, end = stats.last_month_range(now)
    assert start == datetime(2025, 12, 1)
    assert end.date() == datetime(2025, 12, 31).date()
    this_start, this_end = stats.this_month_range(datetime(2026, 12, 3))
    assert this_start == datetime(2026, 12, 1)
    assert this_end.date() == datetime(2026, 12, 31).date()
