from __future__ import annotations

import logging
import tomllib
import pendulum

from pathlib import Path
from typing import List, Optional, Tuple

from jejak.analytics import classify
from jejak.core.config import Config
from jejak.core.file_system import FileSystem
from jejak.core.store import UNCHANGED, ActivityStore
from jejak.models import Activity

logger = logging.getLogger(__name__)

MIN_TITLE_LENGTH = 2


def clean_title(title: str) -> str:
    title = (title or "").strip()
    if not title:
        raise ValueError("Activity title is required.")
    if len(title) < MIN_TITLE_LENGTH:
        raise ValueError(f"Title must be at least {MIN_TITLE_LENGTH} characters long.")
    return title


def clean_category(category: Optional[str]) -> Optional[str]:
    category = (category or "").strip()
    return category or None


def check_time_range(start: pendulum.DateTime, end: Optional[pendulum.DateTime]) -> None:
    if end is not None and start >= end:
        raise ValueError("End time must be after start time.")


class Workspace:

    def __init__(self, working_dir: Path | None = None):
        self.fs = FileSystem(working_dir)
        self.config = Config.from_dict(tomllib.loads(self.fs.CONFIG_PATH.read_text()))
        self.store = ActivityStore(self.fs.DATABASE_PATH)

    def now(self) -> pendulum.DateTime:
        """
        Get the current time in the configured timezone
        """
        return pendulum.now(self.config.timezone)

    def snapshot(self) -> Tuple[List[Activity], pendulum.DateTime]:
        """
        The current activities together with the instant they should be judged against.
        """
        return self.store.list(), self.now()

    def get_activity(self, id_or_prefix: str) -> Activity:
        return self.store.get(self.store.resolve_id(id_or_prefix))

    def create_activity(self,
                        title: str,
                        category: Optional[str] = None,
                        start: Optional[pendulum.DateTime] = None,
                        end: Optional[pendulum.DateTime] = None,
                        duration_minutes: Optional[int] = None) -> Activity:
        """
        Record a new activity. With `duration_minutes` the activity starts now and
        ends that many minutes later; otherwise it starts at `start` (default now).
        """
        now = self.now()

        if duration_minutes is not None:
            if start is not None or end is not None:
                raise ValueError("A duration cannot be combined with explicit start or end times.")
            if duration_minutes <= 0:
                raise ValueError("Duration must be a positive number.")
            start = now
            end = now.add(minutes=duration_minutes)

        start = start or now
        check_time_range(start, end)

        return self.store.create(
            title=clean_title(title),
            category=clean_category(category),
            created_at=now,
            start_time=start,
            end_time=end,
            user_id=self.config.user_id,
        )

    def edit_activity(self,
                      id_or_prefix: str,
                      title=UNCHANGED,
                      category=UNCHANGED,
                      start=UNCHANGED,
                      end=UNCHANGED) -> Activity:
        current = self.get_activity(id_or_prefix)

        if title is not UNCHANGED:
            title = clean_title(title)
        if category is not UNCHANGED:
            category = clean_category(category)

        check_time_range(
            current.start_time if start is UNCHANGED else start,
            current.end_time if end is UNCHANGED else end,
        )

        return self.store.update(current.id, title=title, category=category,
                                 start_time=start, end_time=end)

    def stop_activity(self, id_or_prefix: str) -> Activity:
        activity = self.get_activity(id_or_prefix)
        now = self.now()
        if activity.end_time is not None:
            raise ValueError(f"Activity '{activity.title}' has already been stopped.")
        if classify(activity, now).is_scheduled:
            raise ValueError(f"Activity '{activity.title}' is scheduled and has not started yet.")
        return self.store.update(activity.id, end_time=now)

    def resume_activity(self, id_or_prefix: str) -> Activity:
        activity = self.get_activity(id_or_prefix)
        if activity.end_time is None:
            raise ValueError(f"Activity '{activity.title}' is still open.")
        return self.store.update(activity.id, end_time=None)

    def toggle_activity(self, id_or_prefix: str) -> Activity:
        """
        Stop an open activity, or resume one that has ended. Scheduled activities can't be toggled.
        """
        activity = self.get_activity(id_or_prefix)
        now = self.now()
        if classify(activity, now).is_scheduled:
            raise ValueError(f"Activity '{activity.title}' is scheduled and has not started yet.")

        if activity.end_time is not None:
            logger.debug("Resuming %s", activity.id)
            return self.store.update(activity.id, end_time=None)
        logger.debug("Stopping %s", activity.id)
        return self.store.update(activity.id, end_time=now)

    def delete_activity(self, id_or_prefix: str) -> Activity:
        activity = self.get_activity(id_or_prefix)
        self.store.delete(activity.id)
        return activity

    def close(self) -> None:
        self.store.close()
