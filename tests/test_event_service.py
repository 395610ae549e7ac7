from datetime import date

import pytest
from fastapi import HTTPException

from app.models.employee_request import EmployeeRequest
from app.models.revenue import WeeklyRevenue
from app.services.event_service import create_employee_request, submit_events
from app.services.points_service import get_ledger_balance


def test_submit_events_posts_one_row_per_event(db, make_employee, make_definition):
    employee = make_employee()
    upsell = make_definition("Upsell", 10, "positive")
    late = make_definition("Late arrival", 5, "negative")

    result = submit_events(db, employee_id=employee.id, event_type_ids=[upsell.id, late.id], comment="busy day")
    db.refresh(employee)

    assert result["total_points"] == 5
    assert len(result["events"]) == 2
    assert result["sale_request_id"] is None
    assert employee.points_balance == 5
    assert get_ledger_balance(db, employee.id) == 5


def test_sale_event_books_revenue_into_the_week(db, make_employee, make_definition):
    employee = make_employee(monthly_revenue_target=1000)
    sale = make_definition("Sale", 20, "positive")
    today = date(2026, 10, 14)

    result = submit_events(db, employee_id=employee.id, event_type_ids=[sale.id], sale_amount=120.5, today=today)
    submit_events(db, employee_id=employee.id, event_type_ids=[sale.id], sale_amount=10, today=today)

    week = db.query(WeeklyRevenue).filter(WeeklyRevenue.employee_id == employee.id).one()
    assert week.week_start_date == date(2026, 10, 12)
    assert week.revenue_amount == 13050

    audit = db.query(EmployeeRequest).filter(EmployeeRequest.id == result["sale_request_id"]).one()
    assert audit.status == "approved"
    assert audit.amount == 12050

    db.refresh(employee)
    assert employee.monthly_revenue_actual == 13050
    assert employee.points_balance == 40


def test_sale_early_in_the_month_counts_toward_that_month(db, make_employee, make_definition):
    employee = make_employee(monthly_revenue_target=1000)
    sale = make_definition("Sale", 20, "positive")

    submit_events(db, employee_id=employee.id, event_type_ids=[sale.id], sale_amount=100, today=date(2026, 4, 1))

    week = db.query(WeeklyRevenue).filter(WeeklyRevenue.employee_id == employee.id).one()
    assert week.week_start_date == date(2026, 3, 30)
    db.refresh(employee)
    assert employee.monthly_revenue_actual == 10000


def test_disabled_event_is_refused(db, make_employee, make_definition):
    employee = make_employee()
    disabled = make_definition("Old rule", 10, "positive", is_enabled=False)

    with pytest.raises(HTTPException) as exc:
        submit_events(db, employee_id=employee.id, event_type_ids=[disabled.id])

    assert exc.value.status_code == 400
    db.refresh(employee)
    assert employee.points_balance == 0


def test_empty_selection_is_refused(db, make_employee):
    employee = make_employee()
    with pytest.raises(HTTPException) as exc:
        submit_events(db, employee_id=employee.id, event_type_ids=[])
    assert exc.value.status_code == 400


def test_employee_request_is_pending_with_signed_points(db, make_employee, make_definition):
    employee = make_employee()
    late = make_definition("Late arrival", 5, "negative")

    request = create_employee_request(db, employee, event_type_id=late.id, description="traffic")

    assert request.status == "pending"
    assert request.points == -5
    assert request.request_type == "negative"
    db.refresh(employee)
    assert employee.points_balance == 0
