"""Pure time rules — overdue/upcoming classification and reminder windows.

No database, no clock: every function takes ``now`` explicitly.
"""

from datetime import datetime, timedelta, timezone

import pytest

from clientdesk.schedule import (
    as_utc,
    classify_reminder,
    days_remaining,
    is_project_overdue,
    is_reminder_due_soon,
    is_reminder_overdue,
    window_bounds,
)

# Wednesday
NOW = datetime(2026, 10, 14, 10, 30, tzinfo=timezone.utc)


def test_as_utc_treats_naive_as_utc():
    assert as_utc(datetime(2026, 1, 1, 12)) == datetime(2026, 1, 1, 12, tzinfo=timezone.utc)


def test_as_utc_converts_offsets():
    plus_two = timezone(timedelta(hours=2))
    converted = as_utc(datetime(2026, 1, 1, 12, tzinfo=plus_two))
    assert converted.tzinfo == timezone.utc
    assert converted.hour == 10


# ═══════════════════════════════════════════════════════════
# Reminders
# ═══════════════════════════════════════════════════════════


def test_pending_past_reminder_is_overdue():
    assert is_reminder_overdue(NOW - timedelta(minutes=1), "Pending", NOW)


@pytest.mark.parametrize("status", ["Completed", "Cancelled"])
def test_closed_reminder_is_never_overdue(status):
    assert not is_reminder_overdue(NOW - timedelta(days=30), status, NOW)


def test_due_soon_is_a_48_hour_horizon():
    assert is_reminder_due_soon(NOW + timedelta(hours=47), "Pending", NOW)
    assert not is_reminder_due_soon(NOW + timedelta(hours=49), "Pending", NOW)
    assert not is_reminder_due_soon(NOW - timedelta(hours=1), "Pending", NOW)


def test_classify_reminder():
    assert classify_reminder(NOW - timedelta(days=1), "Pending", NOW) == "overdue"
    assert classify_reminder(NOW + timedelta(days=90), "Pending", NOW) == "upcoming"
    assert classify_reminder(NOW - timedelta(days=1), "Completed", NOW) is None
    assert classify_reminder(NOW + timedelta(days=1), "Cancelled", NOW) is None


def test_classify_reminder_respects_until():
    until = NOW + timedelta(days=5)
    assert classify_reminder(NOW + timedelta(days=4), "Pending", NOW, until) == "upcoming"
    assert classify_reminder(NOW + timedelta(days=6), "Pending", NOW, until) is None


def test_overdue_and_upcoming_are_disjoint():
    for hours in range(-72, 73, 6):
        due = NOW + timedelta(hours=hours)
        overdue = is_reminder_overdue(due, "Pending", NOW)
        bucket = classify_reminder(due, "Pending", NOW)
        assert (bucket == "overdue") == overdue
        assert bucket in ("overdue", "upcoming")


# ═══════════════════════════════════════════════════════════
# Projects
# ═══════════════════════════════════════════════════════════


def test_open_project_past_deadline_is_overdue():
    assert is_project_overdue(NOW - timedelta(hours=1), "In Progress", NOW)
    assert is_project_overdue(NOW - timedelta(hours=1), "Pending", NOW)


@pytest.mark.parametrize("status", ["Completed", "Cancelled"])
def test_closed_project_is_never_overdue(status):
    assert not is_project_overdue(NOW - timedelta(days=5), status, NOW)


def test_days_remaining_rounds_up():
    assert days_remaining(NOW + timedelta(hours=36), NOW) == 2
    assert days_remaining(NOW + timedelta(days=14), NOW) == 14
    assert days_remaining(NOW - timedelta(hours=36), NOW) == -1


def test_days_remaining_accepts_naive_deadline():
    naive = (NOW + timedelta(days=3)).replace(tzinfo=None)
    assert days_remaining(naive, NOW) == 3


# ═══════════════════════════════════════════════════════════
# Windows
# ═══════════════════════════════════════════════════════════


def _utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_window_today_and_tomorrow():
    assert window_bounds("today", NOW) == (_utc(2026, 10, 14), _utc(2026, 10, 15))
    assert window_bounds("tomorrow", NOW) == (_utc(2026, 10, 15), _utc(2026, 10, 16))


def test_window_weeks_end_on_sunday():
    assert window_bounds("thisweek", NOW) == (NOW, _utc(2026, 10, 19))
    assert window_bounds("nextweek", NOW) == (_utc(2026, 10, 19), _utc(2026, 10, 26))


def test_window_months_wrap_the_year():
    december = _utc(2026, 12, 10, 8)
    assert window_bounds("thismonth", december) == (december, _utc(2027, 1, 1))
    assert window_bounds("nextmonth", december) == (_utc(2027, 1, 1), _utc(2027, 2, 1))


def test_window_years():
    assert window_bounds("thisyear", NOW) == (NOW, _utc(2027, 1, 1))
    assert window_bounds("nextyear", NOW) == (_utc(2027, 1, 1), _utc(2028, 1, 1))


def test_window_relative_spans():
    assert window_bounds("upcoming", NOW) == (NOW, None)
    assert window_bounds("upcoming7days", NOW) == (NOW, NOW + timedelta(days=7))
    assert window_bounds("past", NOW) == (None, NOW)
    assert window_bounds("past30days", NOW) == (NOW - timedelta(days=30), NOW)


@pytest.mark.parametrize("window", ["all", "whenever", ""])
def test_window_all_and_unknown_are_open(window):
    assert window_bounds(window, NOW) == (None, None)
