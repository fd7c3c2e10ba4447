from __future__ import annotations

import math
import pendulum

from dataclasses import dataclass

from jejak.analytics.status import classify
from jejak.models import Activity


def round_half_up(value: float) -> int:
    # .5 goes towards +inf, never to the nearest even number.
    return math.floor(value + 0.5)


def elapsed_seconds(activity: Activity, now: pendulum.DateTime) -> float:
    """Signed seconds from start to end, or from start to `now` when open-ended."""
    end = activity.end_time if activity.end_time is not None else now
    return (end - activity.start_time).total_seconds()


def duration_minutes(activity: Activity, now: pendulum.DateTime) -> int:
    return round_half_up(elapsed_seconds(activity, now) / 60)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(abs(minutes), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


@dataclass(frozen=True)
class DurationLabel:
    minutes: int
    prefix: str  # "Planned" or "Duration"
    overdue: bool

    def __str__(self) -> str:
        text = f"{self.prefix}: {format_duration(self.minutes)}"
        if self.overdue:
            text += " (Overdue)"
        return text


def describe_duration(activity: Activity, now: pendulum.DateTime) -> DurationLabel:
    """
    Pair the signed duration with how it should be read.
    Scheduled activities are "planned" time and are never overdue, even though
    their open-ended duration is negative.
    """
    minutes = duration_minutes(activity, now)
    scheduled = classify(activity, now).is_scheduled
    return DurationLabel(
        minutes=minutes,
        prefix="Planned" if scheduled else "Duration",
        overdue=minutes < 0 and not scheduled,
    )
