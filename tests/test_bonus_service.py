from datetime import date

import pytest
from fastapi import HTTPException

from app.models.employee_event import EmployeeEvent
from app.models.notification import Notification
from app.services.bonus_service import (
    approve_bonus_request,
    get_current_bonus_request,
    reject_bonus_request,
    submit_bonus_request,
)
from app.services.points_service import get_ledger_balance
from app.services.revenue_service import update_targets


TODAY = date(2026, 10, 18)


def _eligible(db, make_employee, bonus_type="EUR", bonus_value=100):
    employee = make_employee(monthly_revenue_target=1000)
    update_targets(db, employee, actual_euros=1200, bonus_value=bonus_value, bonus_type=bonus_type, today=TODAY)
    db.commit()
    return employee


def test_bonus_needs_the_target_reached(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    update_targets(db, employee, actual_euros=500, bonus_value=100, today=TODAY)
    db.commit()

    with pytest.raises(HTTPException) as exc:
        submit_bonus_request(db, employee, today=TODAY)
    assert exc.value.status_code == 400


def test_bonus_needs_a_configured_bonus(db, make_employee):
    employee = make_employee(monthly_revenue_target=1000)
    update_targets(db, employee, actual_euros=1500, today=TODAY)
    db.commit()

    with pytest.raises(HTTPException) as exc:
        submit_bonus_request(db, employee, today=TODAY)
    assert exc.value.detail == "No revenue bonus configured"


def test_one_bonus_request_per_month(db, make_employee):
    employee = _eligible(db, make_employee)

    bonus = submit_bonus_request(db, employee, today=TODAY)
    assert bonus.status == "pending"
    assert (bonus.year, bonus.month) == (2026, 10)
    assert get_current_bonus_request(db, employee.id, today=TODAY).id == bonus.id

    with pytest.raises(HTTPException) as exc:
        submit_bonus_request(db, employee, today=TODAY)
    assert exc.value.status_code == 409

    # next month is a new period
    assert submit_bonus_request(db, employee, today=date(2026, 11, 2)).month == 11


def test_points_bonus_lands_in_the_ledger(db, make_employee):
    employee = _eligible(db, make_employee, bonus_type="POINTS", bonus_value=75)
    bonus = submit_bonus_request(db, employee, today=TODAY)

    approved = approve_bonus_request(db, bonus.id)

    assert approved.status == "approved"
    db.refresh(employee)
    assert employee.points_balance == 75
    assert get_ledger_balance(db, employee.id) == 75
    row = db.query(EmployeeEvent).filter(EmployeeEvent.source_id == bonus.id).one()
    assert row.transaction_type == "BONUS"


def test_eur_bonus_does_not_touch_points(db, make_employee):
    employee = _eligible(db, make_employee, bonus_type="EUR", bonus_value=100)
    bonus = submit_bonus_request(db, employee, today=TODAY)

    approve_bonus_request(db, bonus.id)

    db.refresh(employee)
    assert employee.points_balance == 0


def test_rejected_bonus_cannot_be_approved(db, make_employee):
    employee = _eligible(db, make_employee)
    bonus = submit_bonus_request(db, employee, today=TODAY)
    reject_bonus_request(db, bonus.id, notes="audit pending")

    with pytest.raises(HTTPException) as exc:
        approve_bonus_request(db, bonus.id)
    assert exc.value.status_code == 409


def test_rejection_notifies_the_employee(db, make_employee):
    employee = _eligible(db, make_employee)
    bonus = submit_bonus_request(db, employee, today=TODAY)

    reject_bonus_request(db, bonus.id, notes="audit pending")

    note = db.query(Notification).filter(Notification.employee_id == employee.id).one()
    assert note.title == "Bonus rejected"
    assert note.message == "audit pending"
