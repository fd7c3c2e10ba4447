from __future__ import annotations

import unicodedata
import pendulum

from dataclasses import dataclass
from typing import Callable, List, Sequence

from jejak.analytics.duration import elapsed_seconds
from jejak.analytics.status import classify
from jejak.models import Activity

STATUS_OPTIONS = ("all", "active", "completed", "scheduled")
SORT_OPTIONS = ("newest", "oldest", "duration", "alphabetical")


@dataclass(frozen=True)
class ViewQuery:
    """Search, filter and sort settings for a list of activities. The defaults filter nothing."""
    search_term: str = ""
    category: str = "all"
    status: str = "all"
    sort_by: str = "newest"

    def __post_init__(self):
        if self.status not in STATUS_OPTIONS:
            raise ValueError(f"Invalid status filter: {self.status}. Expected one of {', '.join(STATUS_OPTIONS)}.")
        if self.sort_by not in SORT_OPTIONS:
            raise ValueError(f"Invalid sort option: {self.sort_by}. Expected one of {', '.join(SORT_OPTIONS)}.")

    @property
    def has_active_filters(self) -> bool:
        return self != ViewQuery()


def collation_key(text: str) -> tuple[str, str]:
    """
    Approximate a locale-aware comparison: accents and case are ignored first,
    then the raw text breaks ties so the order is still total.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(c for c in decomposed if not unicodedata.combining(c))
    return base.casefold(), text


def matches_search(activity: Activity, term: str) -> bool:
    if not term:
        return True
    needle = term.lower()
    if needle in activity.title.lower():
        return True
    return activity.category is not None and needle in activity.category.lower()


def matches_status(activity: Activity, status: str, now: pendulum.DateTime) -> bool:
    if status == "active":
        return classify(activity, now).is_in_progress
    if status == "completed":
        return activity.end_time is not None and activity.end_time < now
    if status == "scheduled":
        return activity.start_time > now
    return True


def _sorter(sort_by: str, now: pendulum.DateTime) -> tuple[Callable[[Activity], object], bool]:
    if sort_by == "oldest":
        return (lambda a: a.start_time), False
    if sort_by == "duration":
        return (lambda a: elapsed_seconds(a, now)), True
    if sort_by == "alphabetical":
        return (lambda a: collation_key(a.title)), False
    return (lambda a: a.start_time), True


def view(activities: Sequence[Activity], query: ViewQuery, now: pendulum.DateTime) -> List[Activity]:
    filtered = [
        activity for activity in activities
        if matches_search(activity, query.search_term)
        and (query.category == "all" or activity.category == query.category)
        and matches_status(activity, query.status, now)
    ]
    key, reverse = _sorter(query.sort_by, now)
    return sorted(filtered, key=key, reverse=reverse)


def categories(activities: Sequence[Activity]) -> List[str]:
    """Distinct non-empty categories, sorted, as offered by the category filter."""
    return sorted({a.category for a in activities if a.category})
