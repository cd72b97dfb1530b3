"""
Name: Dashboard Activity Feed & Payroll Summary Tests

Responsibilities:
  - time_ago: umbrales de minutos/horas/días/meses
  - Feed: orden por fecha real, íconos por estado, tope de 15 items
  - Payroll: total/promedio/min/max; cero filas => ceros
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from hrms.application.activity_feed import (
    MAX_ACTIVITY_ITEMS,
    build_activity_feed,
    time_ago,
)
from hrms.application.payroll import payroll_summary

pytestmark = pytest.mark.unit

NOW = datetime(2024, 6, 10, 12, 0, 0)


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=2), "2 days ago"),
        (timedelta(days=65), "2 months ago"),
    ],
)
def test_time_ago(delta, expected):
    assert time_ago(NOW - delta, NOW) == expected


def _attendance(minutes_ago, status="Checked In", name="Ana"):
    return {
        "type": "attendance",
        "occurred_at": NOW - timedelta(minutes=minutes_ago),
        "status": status,
        "leave_type": None,
        "first_name": name,
        "last_name": "Diaz",
    }


def _leave(minutes_ago, status="pending", leave_type="Vacation"):
    return {
        "type": "leave",
        "occurred_at": NOW - timedelta(minutes=minutes_ago),
        "status": status,
        "leave_type": leave_type,
        "first_name": "Bob",
        "last_name": "Stone",
    }


def test_feed_is_sorted_by_timestamp_not_label():
    rows = [_attendance(120), _leave(3), _attendance(45, status="Checked Out")]

    feed = build_activity_feed(rows, now=NOW)

    assert [item["time"] for item in feed] == [
        "3 minutes ago",
        "45 minutes ago",
        "2 hours ago",
    ]


def test_feed_attendance_entry():
    feed = build_activity_feed([_attendance(10)], now=NOW)

    assert feed == [
        {
            "user": "Ana Diaz",
            "action": "checked in at 11:50:00",
            "time": "10 minutes ago",
            "icon": "✅",
            "type": "attendance",
        }
    ]


def test_feed_icons():
    rows = [
        _attendance(1, status="Checked Out"),
        _leave(2, status="approved"),
        _leave(3, status="rejected"),
        _leave(4, status="pending"),
    ]

    icons = [item["icon"] for item in build_activity_feed(rows, now=NOW)]

    assert icons == ["🚪", "✅", "❌", "⏳"]


def test_feed_leave_action_text():
    feed = build_activity_feed([_leave(1, status="approved", leave_type="Sick")], now=NOW)

    assert feed[0]["action"] == "approved Sick request"
    assert feed[0]["user"] == "Bob Stone"


def test_feed_is_capped():
    rows = [_attendance(i) for i in range(40)]

    feed = build_activity_feed(rows, now=NOW)

    assert len(feed) == MAX_ACTIVITY_ITEMS == 15
    assert feed[0]["time"] == "Just now"


def test_feed_mixes_aware_and_naive_timestamps():
    aware_now = NOW.replace(tzinfo=timezone.utc)
    rows = [_attendance(5), _leave(1)]
    rows[1]["occurred_at"] = rows[1]["occurred_at"].replace(tzinfo=timezone.utc)

    feed = build_activity_feed(rows, now=aware_now)

    assert [item["type"] for item in feed] == ["leave", "attendance"]


def test_feed_skips_rows_without_timestamp():
    rows = [{"type": "leave", "occurred_at": None, "status": "pending"}]

    assert build_activity_feed(rows, now=NOW) == []


# ============================================================================
# Payroll
# ============================================================================


def test_payroll_summary():
    rows = [
        {"salary": Decimal("3000.00")},
        {"salary": Decimal("5000.00")},
        {"salary": None},
    ]

    summary = payroll_summary(rows)

    assert summary == {
        "totalEmployees": 3,
        "totalSalary": 8000.0,
        "averageSalary": pytest.approx(8000.0 / 3),
        "minSalary": 0.0,
        "maxSalary": 5000.0,
    }


def test_payroll_summary_empty():
    assert payroll_summary([]) == {
        "totalEmployees": 0,
        "totalSalary": 0,
        "averageSalary": 0,
        "minSalary": 0,
        "maxSalary": 0,
    }
