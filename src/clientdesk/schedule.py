"""Pure time helpers: UTC normalisation and overdue/upcoming rules.

Nothing here touches the database or reads the clock on its own; callers
pass ``now`` in, so one request sees one consistent "now".
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from clientdesk.db.models import PROJECT_CLOSED_STATUSES

UPCOMING_HORIZON = timedelta(hours=48)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC (SQLite hands them back naive)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ─── Reminders ──────────────────────────────────────────

def is_reminder_overdue(due_date: datetime, status: str, now: datetime) -> bool:
    return status == "Pending" and as_utc(due_date) < now


def is_reminder_upcoming(
    due_date: datetime,
    status: str,
    now: datetime,
    until: Optional[datetime] = None,
) -> bool:
    """Pending and due at or after ``now`` (and not after ``until`` if given)."""
    if status != "Pending":
        return False
    due = as_utc(due_date)
    if due < now:
        return False
    return until is None or due <= until


def is_reminder_due_soon(due_date: datetime, status: str, now: datetime) -> bool:
    """Pending and due within the next 48 hours."""
    due = as_utc(due_date)
    return status == "Pending" and now < due < now + UPCOMING_HORIZON


def classify_reminder(
    due_date: datetime,
    status: str,
    now: datetime,
    until: Optional[datetime] = None,
) -> Optional[str]:
    """"overdue", "upcoming", or None for reminders in neither bucket."""
    if is_reminder_overdue(due_date, status, now):
        return "overdue"
    if is_reminder_upcoming(due_date, status, now, until):
        return "upcoming"
    return None


# ─── Projects ───────────────────────────────────────────

def is_project_overdue(deadline: datetime, status: str, now: datetime) -> bool:
    return status not in PROJECT_CLOSED_STATUSES and as_utc(deadline) < now


def days_remaining(deadline: datetime, now: datetime) -> int:
    """Whole days until the deadline, rounded up; negative once past."""
    return math.ceil((as_utc(deadline) - now).total_seconds() / 86400)


# ─── Reminder windows ───────────────────────────────────

REMINDER_WINDOWS = (
    "all",
    "today",
    "tomorrow",
    "thisweek",
    "nextweek",
    "thismonth",
    "nextmonth",
    "thisyear",
    "nextyear",
    "upcoming",
    "upcoming7days",
    "upcoming30days",
    "past",
    "past7days",
    "past30days",
)


def _start_of_day(value: datetime) -> datetime:
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _first_of_month(year: int, month: int, tz) -> datetime:
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1, tzinfo=tz)


def window_bounds(
    window: str, now: datetime
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Due-date range ``[start, end)`` for a named window, relative to ``now``.

    Weeks end on Sunday. Either bound may be None (open-ended). "all" and
    unknown names return (None, None).
    """
    tz = now.tzinfo
    today = _start_of_day(now)
    day = timedelta(days=1)

    if window == "today":
        return today, today + day
    if window == "tomorrow":
        return today + day, today + 2 * day
    if window in ("thisweek", "nextweek"):
        # Monday=0 … Sunday=6; the week runs through the coming Sunday
        next_monday = today + timedelta(days=7 - now.weekday())
        if window == "thisweek":
            return now, next_monday
        return next_monday, next_monday + timedelta(days=7)
    if window == "thismonth":
        return now, _first_of_month(now.year, now.month + 1, tz)
    if window == "nextmonth":
        return (
            _first_of_month(now.year, now.month + 1, tz),
            _first_of_month(now.year, now.month + 2, tz),
        )
    if window == "thisyear":
        return now, datetime(now.year + 1, 1, 1, tzinfo=tz)
    if window == "nextyear":
        return datetime(now.year + 1, 1, 1, tzinfo=tz), datetime(now.year + 2, 1, 1, tzinfo=tz)
    if window == "upcoming":
        return now, None
    if window == "upcoming7days":
        return now, now + timedelta(days=7)
    if window == "upcoming30days":
        return now, now + timedelta(days=30)
    if window == "past":
        return None, now
    if window == "past7days":
        return now - timedelta(days=7), now
    if window == "past30days":
        return now - timedelta(days=30), now
    return None, None
