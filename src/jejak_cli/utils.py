import os
import subprocess
import dateparser
import pendulum
from datetime import datetime

from pathlib import Path

def edit_file(path: Path) -> bool:
    """
    Open a file in the user's preferred editor and check if it was modified.
    If the file was modified, return True. Otherwise, return False.
    """
    editor = os.getenv("EDITOR", "vim")

    pre_edit = path.read_text()
    subprocess.run([editor, str(path)], check=True)
    post_edit = path.read_text()

    # Editors like to add a trailing newline on save; that isn't a change.
    return pre_edit.strip() != post_edit.strip()

def resolve_natural_datetime(now: pendulum.DateTime, arg: str | None) -> pendulum.DateTime | None:
    """
    Parse a natural-language time relative to `now` and return it in `now`'s timezone.
    Examples: "now", "14:30", "tomorrow 9am", "in 2 hours", "2025-08-03 08:00".
    """
    if arg is None:
        return None
    if arg.strip().lower() == "now":
        return now

    # dateparser wants a plain datetime; the wall clock of `now` is the base.
    base = datetime(now.year, now.month, now.day, now.hour, now.minute, now.second, now.microsecond)
    dt = dateparser.parse(
        arg,
        settings={
            "RELATIVE_BASE": base,
            "RETURN_AS_TIMEZONE_AWARE": False,
        },
    )
    if dt is None:
        raise ValueError(f"Invalid date/time string: {arg}")

    return pendulum.datetime(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
                             dt.microsecond, tz=now.timezone)
