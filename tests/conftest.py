"""
Shared pytest fixtures for jejak tests.
"""
import uuid

import pendulum
import pytest

from jejak.core import Workspace
from jejak.models import Activity


CONFIG_TOML = """
[workspace]
timezone = "UTC"

[goals]
weekly_activities = 10
weekly_hours = 40

[display]
top_categories = 5
"""


@pytest.fixture
def fixed_now():
    """
    A fixed reference instant: Wednesday 2025-01-15 14:30 UTC.
    """
    return pendulum.datetime(2025, 1, 15, 14, 30, 0, tz="UTC")


@pytest.fixture
def make_activity(fixed_now):
    """
    Build an Activity with sensible defaults; override any field by keyword.
    """
    def _make(title="Lari Pagi", category=None, start=None, end=None, **kwargs):
        return Activity(
            id=kwargs.pop("id", str(uuid.uuid4())),
            title=title,
            category=category,
            start_time=start if start is not None else fixed_now,
            end_time=end,
            created_at=kwargs.pop("created_at", fixed_now),
            **kwargs,
        )
    return _make


@pytest.fixture
def temp_jejak_dir(tmp_path):
    """
    Create a `.jejak` directory with a minimal UTC config.
    """
    jejak_dir = tmp_path / ".jejak"
    jejak_dir.mkdir()
    (jejak_dir / "config.toml").write_text(CONFIG_TOML)
    return jejak_dir


@pytest.fixture
def frozen_now(monkeypatch, fixed_now):
    """
    Make every Workspace report `fixed_now` as the current time.
    """
    monkeypatch.setattr(Workspace, "now", lambda self: fixed_now)
    return fixed_now


@pytest.fixture
def workspace(temp_jejak_dir, monkeypatch, frozen_now):
    """
    A Workspace pointed at the temp directory, with the clock frozen.
    """
    monkeypatch.setenv("JEJAK_DIR", str(temp_jejak_dir))
    ws = Workspace()
    yield ws
    ws.close()
