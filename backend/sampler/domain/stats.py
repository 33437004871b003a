from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Tuple

# Highest tier first: (level, name, min_points)
TIER_THRESHOLDS = [
    (5, "SampleMaster", 100_000),
    (4, "VIS", 25_000),
    (3, "SuperSampler", 5_000),
    (2, "SampleFan", 1_000),
    (1, "NewbieSampler", 0),
]

# Not tracked yet; the dashboard shows fixed values until delivery receipts are stored.
PLACEHOLDER_OPEN_RATE = 65
PLACEHOLDER_CLICK_RATE = 48


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_change(current: float, previous: float) -> int:
    """Percentage change from ``previous`` to ``current``."""
    if previous == 0:
        return 100 if current > 0 else 0
    return round_half_up(((current - previous) / previous) * 100)


def average_points(total_points: float, total_users: int) -> int:
    if total_users <= 0:
        return 0
    return round_half_up(total_points / total_users)


def tier_from_points(points: float) -> Tuple[int, str]:
    for level, name, min_points in TIER_THRESHOLDS:
        if points >= min_points:
            return level, name
    return 1, "NewbieSampler"


def this_month_range(now: datetime) -> Tuple[datetime, datetime]:
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, _next_month(start) - timedelta(microseconds=1)


def last_month_range(now: datetime) -> Tuple[datetime, datetime]:
    this_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    end = this_start - timedelta(microseconds=1)
    start = end.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    return start, end


def this_week_range(now: datetime) -> Tuple[datetime, datetime]:
    """Monday 00:00 through Sunday 23:59:59.999999 of the week containing ``now``."""
    monday = (now - timedelta(days=now.weekday())).replace(hour=0, minute=0, second=0, microsecond=0)
    return monday, monday + timedelta(days=7) - timedelta(microseconds=1)


def _next_month(start: datetime) -> datetime:
    if start.month == 12:
        return start.replace(year=start.year + 1, month=1)
    return start.replace(month=start.month + 1)
