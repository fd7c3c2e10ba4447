import pendulum

from typing import Sequence

from rich.markup import escape
from rich.table import Table

from jejak.analytics import classify, describe_duration, format_duration
from jejak.analytics.summary import GoalProgress, Summary
from jejak.models import Activity

"""
┌──────────┬───────────┬──────────┬─────────────┬───────────────┬──────────────────┐
│ ID       │ Title     │ Category │ Status      │ Time          │ Duration         │
├──────────┼───────────┼──────────┼─────────────┼───────────────┼──────────────────┤
│ 3f9c2a1b │ Lari Pagi │ Olahraga │ Active      │ 06:00 -       │ Duration: 30m    │
│ 8d01e7aa │ Rapat     │ Kerja    │ Tomorrow    │ Sat 17 Oct    │ Planned: 1h 0m   │
└──────────┴───────────┴──────────┴─────────────┴───────────────┴──────────────────┘
"""

SHORT_ID_LENGTH = 8


class ActivityFormatter:

    @classmethod
    def short_id(cls, activity: Activity) -> str:
        return activity.id[:SHORT_ID_LENGTH]

    @classmethod
    def time_range(cls, activity: Activity, now: pendulum.DateTime) -> str:
        status = classify(activity, now)
        start = activity.start_time.in_timezone(now.timezone)
        text = start.format("HH:mm")
        if status.is_scheduled:
            text = f"{start.format('ddd D MMM')} {text}"
        elif start.date() != now.date():
            text = f"{start.format('D MMM')} {text}"

        if activity.end_time is not None:
            return f"{text} - {activity.end_time.in_timezone(now.timezone).format('HH:mm')}"
        if status.is_scheduled:
            return f"{text} (Scheduled)"
        if status.is_in_progress:
            return f"{text} - In Progress"
        return text

    @classmethod
    def activity_table(cls, activities: Sequence[Activity], now: pendulum.DateTime) -> Table:
        table = Table()
        table.add_column("ID", style="dim")
        table.add_column("Title")
        table.add_column("Category")
        table.add_column("Status")
        table.add_column("Time")
        table.add_column("Duration", justify="right")

        for activity in activities:
            status = classify(activity, now)
            duration = describe_duration(activity, now)
            duration_text = str(duration)
            if duration.overdue:
                duration_text = f"[red]{duration_text}[/red]"
            table.add_row(
                cls.short_id(activity),
                escape(activity.title),
                escape(activity.category or ""),
                f"[{status.style}]{status.label}[/{status.style}]",
                cls.time_range(activity, now),
                duration_text,
            )
        return table

    @classmethod
    def summary_table(cls, summary: Summary) -> Table:
        table = Table(title="Statistics")
        table.add_column("")
        table.add_column("Value", justify="right")
        table.add_column("")
        table.add_row("Total Activities", str(summary.total), "All time")
        table.add_row("Today's Activities", str(summary.today), format_duration(summary.today_duration_minutes))
        table.add_row("Active Now", str(summary.active), "Currently running")
        table.add_row("Scheduled", str(summary.scheduled), "Future activities")
        table.add_row("Completed", str(summary.completed), "Ended")
        table.add_row("This Week", str(summary.week), "Last 7 days")
        table.add_row("Total Time", f"{summary.total_duration_hours}h", "All activities")
        return table

    @classmethod
    def category_table(cls, summary: Summary, limit: int) -> Table:
        table = Table(title="Top Categories")
        table.add_column("Category")
        table.add_column("Activities", justify="right")
        table.add_column("Hours", justify="right")
        table.add_column("Share", justify="right")
        for share in summary.top_categories(limit):
            table.add_row(share.category, str(share.count), f"{share.hours}h", f"{share.percentage:.0f}%")
        return table

    @classmethod
    def goal_table(cls, progress: GoalProgress) -> Table:
        table = Table(title="Weekly Goal Progress")
        table.add_column("Goal")
        table.add_column("Progress", justify="right")
        table.add_column("", justify="right")
        table.add_row("Activities Goal", f"{progress.activities}/{progress.activities_goal}",
                      f"{progress.activities_pct:.0f}%")
        table.add_row("Time Goal", f"{progress.hours}/{progress.hours_goal}h", f"{progress.hours_pct:.0f}%")
        return table
