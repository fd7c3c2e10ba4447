"""
Pure functions over activity snapshots. Nothing here reads the clock; every
call takes the reference instant `now` explicitly.
"""
from .status import Status, StatusKind, classify
from .duration import DurationLabel, describe_duration, duration_minutes, format_duration
from .summary import CategoryShare, CategoryStat, GoalProgress, Summary, goal_progress, summarize
from .view import ViewQuery, categories, view
