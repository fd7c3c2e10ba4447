from __future__ import annotations

import pendulum

from dataclasses import dataclass
from typing import Any, Dict, Optional

PLACEHOLDER_USER_ID = "00000000-0000-0000-0000-000000000000"

@dataclass(frozen=True)
class Activity:
    """A time-stamped thing you did, are doing, or plan to do."""
    id: str  # UUID4 string
    title: str
    start_time: pendulum.DateTime
    created_at: pendulum.DateTime
    category: Optional[str] = None  # Free text, no fixed vocabulary
    end_time: Optional[pendulum.DateTime] = None  # None while open-ended
    user_id: str = PLACEHOLDER_USER_ID

    @classmethod
    def from_dict(cls, data: dict) -> Activity:
        end_time = data.get("end_time")
        return cls(
            id=data["id"],
            title=data["title"],
            start_time=pendulum.parse(data["start_time"]),
            created_at=pendulum.parse(data["created_at"]),
            category=data.get("category") or None,
            end_time=pendulum.parse(end_time) if end_time else None,
            user_id=data.get("user_id", PLACEHOLDER_USER_ID),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "start_time": self.start_time.to_iso8601_string(),
            "end_time": self.end_time.to_iso8601_string() if self.end_time else None,
            "created_at": self.created_at.to_iso8601_string(),
            "user_id": self.user_id,
        }
