"""
Unit tests for jejak.analytics.summary.
"""
import pendulum
import pytest

from jejak.analytics.summary import (
    CategoryStat, Summary, goal_progress, percentage, summarize,
)


def at(day, hour, minute=0):
    return pendulum.datetime(2025, 1, day, hour, minute, tz="UTC")


@pytest.fixture
def sample_activities(make_activity):
    return [
        make_activity("Rapat", "Kerja", start=at(15, 9), end=at(15, 10)),
        make_activity("Coding", "Kerja", start=at(15, 13, 30)),
        make_activity("Baca Buku", "Belajar", start=at(10, 20), end=at(10, 21, 30)),
        make_activity("Gym", None, start=at(1, 7), end=at(1, 8)),
    ]


class TestSummarize:

    def test_empty(self, fixed_now):
        summary = summarize([], fixed_now)
        assert summary == Summary(
            total=0, today=0, week=0, active=0, scheduled=0, completed=0,
            total_duration_hours=0, today_duration_minutes=0, category_breakdown={},
        )
        assert summary.top_categories() == []

    def test_counts(self, sample_activities, fixed_now):
        summary = summarize(sample_activities, fixed_now)
        assert summary.total == 4
        assert summary.today == 2
        assert summary.week == 3
        assert summary.active == 1
        assert summary.scheduled == 0
        assert summary.completed == 3

    def test_durations(self, sample_activities, fixed_now):
        summary = summarize(sample_activities, fixed_now)
        # 60 + 60 + 90 + 60 minutes = 4.5h, rounded up
        assert summary.total_duration_hours == 5
        assert summary.today_duration_minutes == 120

    def test_category_breakdown(self, sample_activities, fixed_now):
        summary = summarize(sample_activities, fixed_now)
        assert list(summary.category_breakdown) == ["Kerja", "Belajar", "Uncategorized"]
        assert summary.category_breakdown["Kerja"] == CategoryStat(count=2, total_duration_ms=7_200_000)
        assert summary.category_breakdown["Belajar"] == CategoryStat(count=1, total_duration_ms=5_400_000)

    def test_breakdown_orders_by_count_then_first_seen(self, make_activity, fixed_now):
        activities = [
            make_activity("Baca", "Belajar"),
            make_activity("Rapat", "Kerja"),
            make_activity("Lari", "Olahraga"),
            make_activity("Email", "Kerja"),
        ]
        breakdown = summarize(activities, fixed_now).category_breakdown
        assert list(breakdown) == ["Kerja", "Belajar", "Olahraga"]
        assert breakdown["Kerja"].count == 2
        assert breakdown["Belajar"].count == 1

    def test_running_and_active_both_count_as_active(self, make_activity, fixed_now):
        activities = [
            make_activity(start=fixed_now.subtract(hours=1)),
            make_activity(start=fixed_now.subtract(hours=1), end=fixed_now.add(hours=1)),
        ]
        assert summarize(activities, fixed_now).active == 2

    def test_scheduled_is_not_active(self, make_activity, fixed_now):
        summary = summarize([make_activity(start=fixed_now.add(days=1))], fixed_now)
        assert summary.scheduled == 1
        assert summary.active == 0
        assert summary.completed == 0

    def test_week_is_rolling_seven_days(self, make_activity, fixed_now):
        activities = [
            make_activity(start=fixed_now.subtract(days=7)),
            make_activity(start=fixed_now.subtract(days=7, seconds=1)),
        ]
        assert summarize(activities, fixed_now).week == 1

    def test_inverted_range_does_not_raise(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.subtract(hours=1), end=fixed_now.subtract(hours=3))
        summary = summarize([activity], fixed_now)
        assert summary.completed == 1
        assert summary.total_duration_hours == -2

    def test_input_is_not_mutated(self, sample_activities, fixed_now):
        before = list(sample_activities)
        summarize(sample_activities, fixed_now)
        assert sample_activities == before


class TestTopCategories:

    def test_shares(self, sample_activities, fixed_now):
        top = summarize(sample_activities, fixed_now).top_categories(2)
        assert [share.category for share in top] == ["Kerja", "Belajar"]
        assert top[0].percentage == 50.0
        assert top[0].hours == 2.0
        assert top[1].percentage == 25.0
        assert top[1].hours == 1.5

    def test_limit_defaults_to_five(self, make_activity, fixed_now):
        activities = [make_activity(category=f"cat-{i}") for i in range(8)]
        assert len(summarize(activities, fixed_now).top_categories()) == 5


class TestGoalProgress:

    def test_progress(self, sample_activities, fixed_now):
        progress = goal_progress(summarize(sample_activities, fixed_now))
        assert progress.activities == 3
        assert progress.activities_pct == 30.0
        assert progress.hours == 5
        assert progress.hours_pct == 12.5

    def test_capped_at_one_hundred(self):
        progress = goal_progress(Summary(week=25, total_duration_hours=80), 10, 40)
        assert progress.activities_pct == 100.0
        assert progress.hours_pct == 100.0

    def test_zero_goal_is_zero_percent(self):
        progress = goal_progress(Summary(week=3), weekly_activities=0, weekly_hours=0)
        assert progress.activities_pct == 0.0
        assert progress.hours_pct == 0.0


def test_percentage_of_nothing_is_zero():
    assert percentage(0, 0) == 0.0
    assert percentage(1, 4) == 25.0
