"""
Temporal status of an activity relative to a reference instant.

The rules are evaluated in a fixed order and the first match wins. Anything
starting after `now` is scheduled no matter what its end time says, and the
later rules rely on that having been ruled out already.
"""
from __future__ import annotations

import math
import pendulum

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jejak.models import Activity

SECONDS_PER_DAY = 24 * 60 * 60


class StatusKind(str, Enum):
    SCHEDULED_TODAY = "scheduled-today"
    SCHEDULED_TOMORROW = "scheduled-tomorrow"
    SCHEDULED_FUTURE = "scheduled-future"
    ACTIVE = "active"
    RUNNING = "running"
    COMPLETED = "completed"


_STYLES = {
    StatusKind.SCHEDULED_TODAY: "blue",
    StatusKind.SCHEDULED_TOMORROW: "magenta",
    StatusKind.SCHEDULED_FUTURE: "slate_blue1",
    StatusKind.ACTIVE: "green",
    StatusKind.RUNNING: "dark_orange",
    StatusKind.COMPLETED: "grey62",
}

_SCHEDULED = {
    StatusKind.SCHEDULED_TODAY,
    StatusKind.SCHEDULED_TOMORROW,
    StatusKind.SCHEDULED_FUTURE,
}


@dataclass(frozen=True)
class Status:
    """A status variant. `days` is only set for SCHEDULED_FUTURE."""
    kind: StatusKind
    days: Optional[int] = None

    @property
    def label(self) -> str:
        if self.kind == StatusKind.SCHEDULED_TODAY:
            return "Scheduled Today"
        if self.kind == StatusKind.SCHEDULED_TOMORROW:
            return "Tomorrow"
        if self.kind == StatusKind.SCHEDULED_FUTURE:
            return f"In {self.days} day{'s' if self.days > 1 else ''}"
        return self.kind.value.capitalize()

    @property
    def style(self) -> str:
        return _STYLES[self.kind]

    @property
    def is_scheduled(self) -> bool:
        return self.kind in _SCHEDULED

    @property
    def is_in_progress(self) -> bool:
        return self.kind in (StatusKind.ACTIVE, StatusKind.RUNNING)


SCHEDULED_TODAY = Status(StatusKind.SCHEDULED_TODAY)
SCHEDULED_TOMORROW = Status(StatusKind.SCHEDULED_TOMORROW)
ACTIVE = Status(StatusKind.ACTIVE)
RUNNING = Status(StatusKind.RUNNING)
COMPLETED = Status(StatusKind.COMPLETED)


def scheduled_future(days: int) -> Status:
    return Status(StatusKind.SCHEDULED_FUTURE, days)


def start_of_day(moment: pendulum.DateTime, reference: pendulum.DateTime) -> pendulum.DateTime:
    """Midnight of `moment`'s calendar date, as seen from `reference`'s timezone."""
    if reference.tzinfo is not None and moment.tzinfo is not None:
        moment = moment.in_timezone(reference.tzinfo)
    return moment.start_of("day")


def classify(activity: Activity, now: pendulum.DateTime) -> Status:
    start = activity.start_time
    end = activity.end_time

    if start > now:
        today = start_of_day(now, now)
        tomorrow = today.add(hours=24)
        activity_day = start_of_day(start, now)

        if activity_day == today:
            return SCHEDULED_TODAY
        if activity_day == tomorrow:
            return SCHEDULED_TOMORROW
        days = math.ceil((activity_day - today).total_seconds() / SECONDS_PER_DAY)
        return scheduled_future(days)

    if end is not None and end < now:
        return COMPLETED

    if end is None:
        return ACTIVE

    if end > now:
        return RUNNING

    # Only reachable when end == now exactly.
    return COMPLETED
