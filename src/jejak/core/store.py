"""
Single-table SQLite store for activities.

The store never reads the clock: creation and stop times are always passed in
by the caller, which keeps it usable from tests with fixed instants.
"""
from __future__ import annotations

import logging
import sqlite3
import uuid
import pendulum

from pathlib import Path
from typing import List, Optional

from jejak.models import Activity, PLACEHOLDER_USER_ID

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS activities (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    user_id TEXT NOT NULL,
    title TEXT NOT NULL,
    category TEXT,
    start_time TEXT NOT NULL,
    end_time TEXT
)
"""

# Marks "leave this column alone" in update(), since None means "clear it".
UNCHANGED = object()


class ActivityNotFoundError(LookupError):
    def __init__(self, activity_id: str):
        super().__init__(f"No activity with id {activity_id}.")
        self.activity_id = activity_id


def _iso(moment: Optional[pendulum.DateTime]) -> Optional[str]:
    return moment.to_iso8601_string() if moment is not None else None


class ActivityStore:

    def __init__(self, path: Path | str):
        self.path = str(path)
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            logger.debug("Opening activity database at %s", self.path)
            self._conn = sqlite3.connect(self.path)
            self._conn.row_factory = sqlite3.Row
            self._conn.execute(SCHEMA)
            self._conn.commit()
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def list(self) -> List[Activity]:
        """All activities, newest start first."""
        rows = self.conn.execute(
            "SELECT * FROM activities ORDER BY start_time DESC"
        ).fetchall()
        activities = [Activity.from_dict(dict(row)) for row in rows]
        # Stored strings may carry different offsets, so order on the parsed instants.
        return sorted(activities, key=lambda a: a.start_time, reverse=True)

    def get(self, activity_id: str) -> Activity:
        row = self.conn.execute(
            "SELECT * FROM activities WHERE id = ?", (activity_id,)
        ).fetchone()
        if row is None:
            raise ActivityNotFoundError(activity_id)
        return Activity.from_dict(dict(row))

    def resolve_id(self, prefix: str) -> str:
        """Expand a unique id prefix to the full id."""
        rows = self.conn.execute(
            "SELECT id FROM activities WHERE id LIKE ? ESCAPE '\\'",
            (prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_") + "%",),
        ).fetchall()
        if not rows:
            raise ActivityNotFoundError(prefix)
        if len(rows) > 1:
            raise ValueError(f"Id prefix {prefix} is ambiguous ({len(rows)} matches).")
        return rows[0]["id"]

    def create(self,
               title: str,
               created_at: pendulum.DateTime,
               start_time: pendulum.DateTime,
               end_time: Optional[pendulum.DateTime] = None,
               category: Optional[str] = None,
               user_id: str = PLACEHOLDER_USER_ID) -> Activity:
        activity = Activity(
            id=str(uuid.uuid4()),
            title=title,
            category=category,
            start_time=start_time,
            end_time=end_time,
            created_at=created_at,
            user_id=user_id,
        )
        self.conn.execute(
            "INSERT INTO activities (id, created_at, user_id, title, category, start_time, end_time) "
            "VALUES (:id, :created_at, :user_id, :title, :category, :start_time, :end_time)",
            activity.to_dict(),
        )
        self.conn.commit()
        logger.info("Created activity %s (%s)", activity.id, activity.title)
        return activity

    def update(self,
               activity_id: str,
               title=UNCHANGED,
               category=UNCHANGED,
               start_time=UNCHANGED,
               end_time=UNCHANGED) -> Activity:
        """
        Update the given columns and return the stored result.
        Passing `end_time=None` clears the end time, which is how an activity is resumed.
        """
        changes = {}
        if title is not UNCHANGED:
            changes["title"] = title
        if category is not UNCHANGED:
            changes["category"] = category
        if start_time is not UNCHANGED:
            changes["start_time"] = _iso(start_time)
        if end_time is not UNCHANGED:
            changes["end_time"] = _iso(end_time)

        if not changes:
            return self.get(activity_id)

        assignments = ", ".join(f"{column} = :{column}" for column in changes)
        cursor = self.conn.execute(
            f"UPDATE activities SET {assignments} WHERE id = :id",
            {**changes, "id": activity_id},
        )
        if cursor.rowcount == 0:
            self.conn.rollback()
            raise ActivityNotFoundError(activity_id)
        self.conn.commit()
        logger.info("Updated activity %s: %s", activity_id, ", ".join(changes))
        return self.get(activity_id)

    def delete(self, activity_id: str) -> None:
        cursor = self.conn.execute("DELETE FROM activities WHERE id = ?", (activity_id,))
        if cursor.rowcount == 0:
            self.conn.rollback()
            raise ActivityNotFoundError(activity_id)
        self.conn.commit()
        logger.info("Deleted activity %s", activity_id)
