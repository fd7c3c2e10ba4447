"""
Unit tests for jejak.analytics.status.
"""
import pendulum
import pytest

from jejak.analytics.status import (
    ACTIVE, COMPLETED, RUNNING, SCHEDULED_TODAY, SCHEDULED_TOMORROW,
    Status, StatusKind, classify, scheduled_future,
)


class TestScheduled:
    """Activities that start after `now`."""

    def test_later_today(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.add(hours=1))
        assert classify(activity, fixed_now) == SCHEDULED_TODAY

    def test_tomorrow(self, make_activity, fixed_now):
        activity = make_activity(start=pendulum.datetime(2025, 1, 16, 8, 0, tz="UTC"))
        assert classify(activity, fixed_now) == SCHEDULED_TOMORROW

    def test_tomorrow_just_after_midnight(self, make_activity, fixed_now):
        activity = make_activity(start=pendulum.datetime(2025, 1, 16, 0, 0, tz="UTC"))
        assert classify(activity, fixed_now) == SCHEDULED_TOMORROW

    def test_two_days_out(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.add(days=2))
        status = classify(activity, fixed_now)
        assert status == scheduled_future(2)
        assert status.days == 2
        assert status.label == "In 2 days"

    def test_days_count_calendar_days_not_hours(self, make_activity, fixed_now):
        """Early on the third day is still three days away."""
        activity = make_activity(start=pendulum.datetime(2025, 1, 18, 0, 30, tz="UTC"))
        assert classify(activity, fixed_now) == scheduled_future(3)

    @pytest.mark.parametrize("end_offset_hours", [-5, 0, 5, None])
    def test_scheduled_wins_regardless_of_end(self, make_activity, fixed_now, end_offset_hours):
        end = fixed_now.add(hours=end_offset_hours) if end_offset_hours is not None else None
        activity = make_activity(start=fixed_now.add(minutes=1), end=end)
        assert classify(activity, fixed_now).is_scheduled

    def test_day_boundaries_use_nows_timezone(self, make_activity):
        """18:00 UTC is already 01:00 the next day in Jakarta."""
        now = pendulum.datetime(2025, 1, 15, 20, 0, tz="Asia/Jakarta")
        activity = make_activity(start=pendulum.datetime(2025, 1, 15, 18, 0, tz="UTC"))
        assert classify(activity, now) == SCHEDULED_TOMORROW


class TestStarted:
    """Activities that started at or before `now`."""

    def test_open_ended_is_active(self, make_activity, fixed_now):
        activity = make_activity(title="Lari Pagi", category="Olahraga", start=fixed_now.subtract(minutes=30))
        assert classify(activity, fixed_now) == ACTIVE

    def test_starting_exactly_now_is_active(self, make_activity, fixed_now):
        assert classify(make_activity(start=fixed_now), fixed_now) == ACTIVE

    def test_end_in_future_is_running(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.subtract(hours=1), end=fixed_now.add(hours=1))
        assert classify(activity, fixed_now) == RUNNING

    def test_end_in_past_is_completed(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.subtract(hours=2), end=fixed_now.subtract(hours=1))
        assert classify(activity, fixed_now) == COMPLETED

    def test_end_exactly_now_falls_back_to_completed(self, make_activity, fixed_now):
        """
        The fallback rule: an activity ending at exactly `now` is not Running.
        Pinned as-is; it was never clearly intended either way.
        """
        activity = make_activity(start=fixed_now.subtract(hours=1), end=fixed_now)
        assert classify(activity, fixed_now) == COMPLETED

    def test_inverted_range_does_not_raise(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.subtract(hours=1), end=fixed_now.subtract(hours=3))
        assert classify(activity, fixed_now) == COMPLETED


class TestStatusMetadata:
    """Labels and style tags are stable."""

    def test_labels(self):
        assert SCHEDULED_TODAY.label == "Scheduled Today"
        assert SCHEDULED_TOMORROW.label == "Tomorrow"
        assert scheduled_future(1).label == "In 1 day"
        assert ACTIVE.label == "Active"
        assert RUNNING.label == "Running"
        assert COMPLETED.label == "Completed"

    def test_every_kind_has_a_style(self):
        for kind in StatusKind:
            assert Status(kind, days=2).style

    def test_in_progress_flags(self):
        assert ACTIVE.is_in_progress and RUNNING.is_in_progress
        assert not COMPLETED.is_in_progress
        assert not SCHEDULED_TODAY.is_in_progress

    def test_classify_is_deterministic(self, make_activity, fixed_now):
        activity = make_activity(start=fixed_now.subtract(minutes=5))
        assert classify(activity, fixed_now) == classify(activity, fixed_now)
