# src/taskkeeper/tasks/due_dates.py

"""
Human-readable due dates.

format_due_date() renders the hover text of the task list:
    Due in 03/10/2015 12:00 AM (in 2 hours)

relative_time() follows the usual "moment" thresholds: 44 seconds is still
"a few seconds", 45 minutes already reads as "an hour", and so on.
"""

from __future__ import annotations

import math
import re
from datetime import datetime, timedelta, timezone

from dateutil import parser

DISPLAY_FORMAT = "%m/%d/%Y %I:%M %p"

_OFFSET_RE = re.compile(r"^\+\s*(\d+)\s*([mhdw])$", re.IGNORECASE)
_OFFSET_UNITS = {"m": "minutes", "h": "hours", "d": "days", "w": "weeks"}


def _aware(dt: datetime) -> datetime:
    # naive values are local wall-clock time
    return dt if dt.tzinfo is not None else dt.astimezone()


def _now(now: datetime | None) -> datetime:
    return _aware(now) if now is not None else datetime.now(timezone.utc)


def _round(x: float) -> int:
    return int(math.floor(x + 0.5))


def _humanize(seconds: float) -> str:
    s = _round(abs(seconds))
    minutes = _round(s / 60)
    hours = _round(minutes / 60)
    days = _round(hours / 24)
    months = _round(days / 30.4)
    years = _round(days / 365)

    if s < 45:
        return "a few seconds"
    if s < 90:
        return "a minute"
    if minutes < 45:
        return f"{minutes} minutes"
    if minutes < 90:
        return "an hour"
    if hours < 22:
        return f"{hours} hours"
    if hours < 36:
        return "a day"
    if days < 26:
        return f"{days} days"
    if days < 45:
        return "a month"
    if days < 320:
        return f"{months} months"
    if days < 548:
        return "a year"
    return f"{years} years"


def relative_time(dt: datetime, now: datetime | None = None) -> str:
    delta = (_aware(dt) - _now(now)).total_seconds()
    text = _humanize(delta)
    return f"in {text}" if delta > 0 else f"{text} ago"


def format_due_date(dt: datetime, now: datetime | None = None) -> str:
    local = _aware(dt).astimezone()
    return f"Due in {local.strftime(DISPLAY_FORMAT)} ({relative_time(dt, now)})"


def is_past_due(dt: datetime, now: datetime | None = None) -> bool:
    return _aware(dt) < _now(now)


def parse_due_date(text: str, now: datetime | None = None) -> datetime:
    """
    Parse a due date typed by the user.

    Accepts "+45m", "+2h", "+3d", "+1w" (relative to now) and anything
    dateutil understands ("2026-10-20 18:00", "Oct 20 6pm", "18:00").
    Missing parts default to today; results are timezone-aware.
    """
    raw = (text or "").strip()
    if not raw:
        raise ValueError("empty due date")

    base = _now(now).astimezone()

    m = _OFFSET_RE.match(raw)
    if m:
        amount, unit = int(m.group(1)), m.group(2).lower()
        return base + timedelta(**{_OFFSET_UNITS[unit]: amount})

    default = base.replace(second=0, microsecond=0, tzinfo=None)
    try:
        parsed = parser.parse(raw, default=default)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"cannot parse due date {raw!r}") from e
    return _aware(parsed)
