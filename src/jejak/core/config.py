from __future__ import annotations

import pendulum

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from jejak.models import PLACEHOLDER_USER_ID

DEFAULT_CATEGORIES = ["Olahraga", "Kerja", "Belajar", "Hobi", "Kesehatan", "Lainnya"]

@dataclass(frozen=True)
class Preset:
    """A shortcut for an activity you start often, with its usual category and length."""
    title: str
    category: Optional[str] = None
    minutes: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> Preset:
        minutes = data.get("minutes")
        return cls(
            title=data["title"],
            category=data.get("category") or None,
            minutes=int(minutes) if minutes is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "category": self.category, "minutes": self.minutes}


DEFAULT_PRESETS = [
    Preset("Lari Pagi", "Olahraga", 30),
    Preset("Baca Buku", "Belajar", 60),
    Preset("Meeting Tim", "Kerja", 45),
    Preset("Meditasi", "Kesehatan", 15),
]


@dataclass
class Config:
    """Configuration for a jejak workspace. This object includes the default values."""
    timezone: pendulum.Timezone = field(default_factory=lambda: pendulum.now().timezone)
    user_id: str = PLACEHOLDER_USER_ID
    weekly_activities_goal: int = 10
    weekly_hours_goal: int = 40
    top_categories: int = 5
    categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    presets: List[Preset] = field(default_factory=lambda: list(DEFAULT_PRESETS))

    @classmethod
    def from_dict(cls, data: dict) -> Config:
        workspace = data.get("workspace", {})
        goals = data.get("goals", {})
        display = data.get("display", {})

        if "timezone" in workspace:
            timezone = pendulum.timezone(workspace["timezone"])
        else:
            timezone = pendulum.now().timezone

        return cls(
            timezone=timezone,
            user_id=workspace.get("user_id", PLACEHOLDER_USER_ID),
            weekly_activities_goal=int(goals.get("weekly_activities", 10)),
            weekly_hours_goal=int(goals.get("weekly_hours", 40)),
            top_categories=int(display.get("top_categories", 5)),
            categories=list(display.get("categories", DEFAULT_CATEGORIES)),
            presets=[Preset.from_dict(p) for p in data["presets"]] if "presets" in data else list(DEFAULT_PRESETS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "workspace": {
                "timezone": self.timezone,
                "user_id": self.user_id,
            },
            "goals": {
                "weekly_activities": self.weekly_activities_goal,
                "weekly_hours": self.weekly_hours_goal,
            },
            "display": {
                "top_categories": self.top_categories,
                "categories": self.categories,
            },
            "presets": [preset.to_dict() for preset in self.presets],
        }

    def find_preset(self, name: str) -> Preset:
        """Look up a preset by title, ignoring case."""
        for preset in self.presets:
            if preset.title.casefold() == name.strip().casefold():
                return preset
        available = ", ".join(p.title for p in self.presets) or "none configured"
        raise ValueError(f"Unknown preset '{name}'. Available: {available}.")
