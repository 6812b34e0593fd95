"""
Completion velocity and remaining-time forecasting.
"""

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from venture_guide.engine.schemas import Forecast, Velocity

DEFAULT_MIN_ITEMS_PER_WEEK = 0.1
SECONDS_PER_DAY = 24 * 60 * 60


def compute_velocity(
    completion_timestamps: Iterable[Optional[datetime]],
    min_items_per_week: float = DEFAULT_MIN_ITEMS_PER_WEEK,
) -> Velocity:
    """
    Compute throughput from completion timestamps.

    A single completion, or several at the same instant, count as one burst:
    ``items_per_week`` equals the number of completions. Otherwise throughput is
    ``count / (span_days / 7)``, floored at ``min_items_per_week``.

    Args:
        completion_timestamps: Completion times; None entries are ignored
        min_items_per_week: Lower bound applied to non-burst velocities

    Returns:
        Velocity (zero with no last completion when nothing has a timestamp)
    """
    timestamps = sorted(ts for ts in completion_timestamps if ts is not None)
    if not timestamps:
        return Velocity(items_per_week=0.0, last_completed_at=None)

    first, last = timestamps[0], timestamps[-1]
    span_days = (last - first).total_seconds() / SECONDS_PER_DAY

    if span_days <= 0:
        return Velocity(items_per_week=float(len(timestamps)), last_completed_at=last)

    items_per_week = len(timestamps) / (span_days / 7)
    return Velocity(
        items_per_week=max(min_items_per_week, items_per_week),
        last_completed_at=last,
    )


def estimate_days(remaining: int, velocity: Velocity) -> Optional[int]:
    """Days needed for ``remaining`` assets at the given velocity; None if velocity is zero."""
    if velocity.items_per_week <= 0:
        return None
    if remaining <= 0:
        return 0
    return math.ceil((remaining / velocity.items_per_week) * 7)


def forecast(
    completed_required: int,
    total_required: int,
    velocity: Velocity,
    now: datetime,
) -> Forecast:
    """
    Forecast when the remaining required assets will be done.

    Returns an empty Forecast when velocity is zero; zero days and ``now``
    when nothing remains.
    """
    if velocity.items_per_week <= 0:
        return Forecast(days=None, date=None)

    remaining = total_required - completed_required
    if remaining <= 0:
        return Forecast(days=0, date=now)

    days = estimate_days(remaining, velocity)
    return Forecast(days=days, date=now + timedelta(days=days))


def estimate_stage_days(remaining_in_stage: int, velocity: Velocity) -> Optional[int]:
    """Remaining-time estimate for one stage; None for finished stages or zero velocity."""
    if remaining_in_stage <= 0:
        return None
    return estimate_days(remaining_in_stage, velocity)
