"""
Aggregate statistics over a snapshot of activities.

Every figure is taken relative to the `now` passed in, so the same snapshot
and instant always give the same summary.
"""
from __future__ import annotations

import pendulum

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from jejak.analytics.duration import duration_minutes, elapsed_seconds, round_half_up
from jejak.analytics.status import start_of_day
from jejak.models import Activity

UNCATEGORIZED = "Uncategorized"


@dataclass
class CategoryStat:
    count: int = 0
    total_duration_ms: int = 0


@dataclass(frozen=True)
class CategoryShare:
    """A category row as shown in the "top categories" breakdown."""
    category: str
    count: int
    total_duration_ms: int
    percentage: float  # share of all activities, 0-100
    hours: float  # one decimal place


@dataclass(frozen=True)
class Summary:
    total: int = 0
    today: int = 0
    week: int = 0
    active: int = 0
    scheduled: int = 0
    completed: int = 0
    total_duration_hours: int = 0
    today_duration_minutes: int = 0
    # Ordered by count descending, ties in first-seen order.
    category_breakdown: Dict[str, CategoryStat] = field(default_factory=dict)

    def top_categories(self, limit: int = 5) -> List[CategoryShare]:
        shares = []
        for category, stat in list(self.category_breakdown.items())[:limit]:
            shares.append(CategoryShare(
                category=category,
                count=stat.count,
                total_duration_ms=stat.total_duration_ms,
                percentage=percentage(stat.count, self.total),
                hours=round(stat.total_duration_ms / 3_600_000, 1),
            ))
        return shares


@dataclass(frozen=True)
class GoalProgress:
    activities: int
    activities_goal: int
    activities_pct: float
    hours: int
    hours_goal: int
    hours_pct: float


def percentage(part: float, whole: float, cap: float | None = None) -> float:
    """part/whole as a percentage. 0/0 is 0%."""
    if not whole:
        return 0.0
    value = part / whole * 100.0
    if cap is not None:
        value = min(value, cap)
    return value


def category_label(activity: Activity) -> str:
    return activity.category or UNCATEGORIZED


def summarize(activities: Sequence[Activity], now: pendulum.DateTime) -> Summary:
    today_start = start_of_day(now, now)
    week_ago = now.subtract(days=7)

    today = week = active = scheduled = completed = 0
    total_minutes = 0
    today_minutes = 0
    breakdown: Dict[str, CategoryStat] = {}

    for activity in activities:
        start, end = activity.start_time, activity.end_time
        minutes = duration_minutes(activity, now)
        total_minutes += minutes

        if start_of_day(start, now) == today_start:
            today += 1
            today_minutes += minutes
        if start >= week_ago:
            week += 1
        if start > now:
            scheduled += 1
        elif end is None or end > now:
            active += 1
        if end is not None and end < now:
            completed += 1

        stat = breakdown.setdefault(category_label(activity), CategoryStat())
        stat.count += 1
        stat.total_duration_ms += round_half_up(elapsed_seconds(activity, now) * 1000)

    # sorted() is stable, so equal counts keep first-seen order
    ordered = dict(sorted(breakdown.items(), key=lambda item: item[1].count, reverse=True))

    return Summary(
        total=len(activities),
        today=today,
        week=week,
        active=active,
        scheduled=scheduled,
        completed=completed,
        total_duration_hours=round_half_up(total_minutes / 60),
        today_duration_minutes=today_minutes,
        category_breakdown=ordered,
    )


def goal_progress(summary: Summary, weekly_activities: int = 10, weekly_hours: int = 40) -> GoalProgress:
    return GoalProgress(
        activities=summary.week,
        activities_goal=weekly_activities,
        activities_pct=percentage(summary.week, weekly_activities, cap=100.0),
        hours=summary.total_duration_hours,
        hours_goal=weekly_hours,
        hours_pct=percentage(summary.total_duration_hours, weekly_hours, cap=100.0),
    )
