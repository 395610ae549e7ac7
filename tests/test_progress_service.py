from datetime import date

import pytest

from app.services.points_service import post_points
from app.services.progress_service import (
    employee_dashboard,
    leaderboard,
    penalty_status,
    percentage,
    points_in_euros,
    points_progress,
    rank_of,
)
from app.services.calendar_service import today


def test_percentages_guard_zero_targets():
    assert percentage(10, 0) == 0.0
    assert points_progress(175) == 50.0
    assert points_progress(10, 0) == 0.0


def test_points_in_euros():
    assert points_in_euros(125) == 12.5


def test_rank_orders_by_balance_then_name(db, make_employee):
    anna = make_employee(full_name="Anna")
    bob = make_employee(full_name="Bob")
    chris = make_employee(full_name="Chris")
    post_points(db, chris, points=50, event_type="Upsell")
    post_points(db, bob, points=20, event_type="Upsell")
    post_points(db, anna, points=20, event_type="Upsell")
    db.commit()

    assert rank_of(db, chris) == 1
    assert rank_of(db, anna) == 2
    assert rank_of(db, bob) == 3
    assert [row["fullName"] for row in leaderboard(db, limit=2)] == ["Chris", "Anna"]


def test_inactive_employee_has_no_rank(db, make_employee):
    employee = make_employee(is_active=False)
    assert rank_of(db, employee) is None


def test_dashboard_includes_recent_events(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    post_points(db, employee, points=35, event_type="Upsell")
    db.commit()

    dashboard = employee_dashboard(db, employee)

    assert dashboard["pointsBalance"] == 35
    assert dashboard["progressPercentage"] == pytest.approx(10.0)
    assert dashboard["revenueRemaining"] == 100000
    assert dashboard["rank"] == 1
    assert len(dashboard["recentEvents"]) == 1
    assert len(dashboard["dailyPoints"]) == 7


def test_penalty_is_advisory(db, make_employee):
    employee = make_employee()
    for _ in range(3):
        post_points(db, employee, points=-5, event_type="Late arrival")
    db.commit()

    status = penalty_status(db, employee, today=today())

    assert status["negativeEvents"] == 3
    assert status["triggered"] is True
    assert status["penaltyEuros"] == 50
    db.refresh(employee)
    assert employee.points_balance == -15


def test_penalty_not_triggered_below_limit(db, make_employee):
    employee = make_employee()
    post_points(db, employee, points=-5, event_type="Late arrival")
    db.commit()

    status = penalty_status(db, employee, today=date(2026, 1, 15))

    assert status["triggered"] is False
    assert status["penaltyEuros"] == 0
