import pytest
from fastapi import HTTPException

from app.models.employee_event import EmployeeEvent
from app.services.points_service import get_ledger_balance, post_points
from app.services.redemption_service import (
    ALREADY_PROCESSED,
    approve_redemption,
    cancel_redemption,
    change_redemption_reward,
    create_redemption,
    list_employee_redemptions,
    reject_redemption,
)


def _fund(db, employee, points):
    post_points(db, employee, points=points, event_type="Upsell")
    db.commit()
    db.refresh(employee)


def test_request_above_balance_is_refused(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 40)
    reward = make_reward(points_cost=50)

    with pytest.raises(HTTPException) as exc:
        create_redemption(db, employee, reward_id=reward.id)

    assert exc.value.status_code == 400
    assert exc.value.detail == "Not enough points: 10 more needed"


def test_forced_approval_without_balance_changes_nothing(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 60)
    reward = make_reward(points_cost=50, stock=3)
    redemption = create_redemption(db, employee, reward_id=reward.id)

    # balance drops after the request was made
    post_points(db, employee, points=-20, event_type="Late")
    db.commit()

    with pytest.raises(HTTPException) as exc:
        approve_redemption(db, redemption.id)

    assert exc.value.status_code == 400
    db.refresh(employee)
    db.refresh(redemption)
    db.refresh(reward)
    assert employee.points_balance == 40
    assert redemption.status == "pending"
    assert reward.stock == 3


def test_approval_deducts_through_the_ledger(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 80)
    reward = make_reward(points_cost=50, stock=2)
    redemption = create_redemption(db, employee, reward_id=reward.id)

    result = approve_redemption(db, redemption.id, delivered_code="ABC-123")

    assert result["success"] is True
    assert result["new_balance"] == 30
    assert get_ledger_balance(db, employee.id) == 30
    row = db.query(EmployeeEvent).filter(EmployeeEvent.source_id == redemption.id).one()
    assert row.transaction_type == "REDEMPTION"
    assert row.points == -50
    db.refresh(reward)
    assert reward.stock == 1


def test_approving_twice_is_a_conflict(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 200)
    reward = make_reward(points_cost=50)
    redemption = create_redemption(db, employee, reward_id=reward.id)
    approve_redemption(db, redemption.id)

    with pytest.raises(HTTPException) as exc:
        approve_redemption(db, redemption.id)

    assert exc.value.status_code == 409
    db.refresh(employee)
    assert employee.points_balance == 150


def test_cancel_after_approval_is_already_processed(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 100)
    reward = make_reward(points_cost=50)
    redemption = create_redemption(db, employee, reward_id=reward.id)
    approve_redemption(db, redemption.id)

    with pytest.raises(HTTPException) as exc:
        cancel_redemption(db, employee, redemption.id)

    assert exc.value.status_code == 409
    assert exc.value.detail == ALREADY_PROCESSED
    db.refresh(redemption)
    assert redemption.status == "approved"


def test_edit_after_rejection_is_already_processed(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 100)
    coffee = make_reward("Coffee", points_cost=50)
    lunch = make_reward("Lunch", points_cost=80)
    redemption = create_redemption(db, employee, reward_id=coffee.id)
    reject_redemption(db, redemption.id, manager_notes="not this month")

    with pytest.raises(HTTPException) as exc:
        change_redemption_reward(db, employee, redemption.id, reward_id=lunch.id)

    assert exc.value.status_code == 409
    db.refresh(redemption)
    assert redemption.reward_name == "Coffee"
    assert redemption.status == "rejected"


def test_stale_version_is_refused(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 100)
    coffee = make_reward("Coffee", points_cost=50)
    lunch = make_reward("Lunch", points_cost=80)
    redemption = create_redemption(db, employee, reward_id=coffee.id)

    edited = change_redemption_reward(db, employee, redemption.id, reward_id=lunch.id, expected_version=1)
    assert edited.version == 2
    assert edited.reward_name == "Lunch"
    assert edited.points_cost == 80

    with pytest.raises(HTTPException) as exc:
        cancel_redemption(db, employee, redemption.id, expected_version=1)
    assert exc.value.status_code == 409

    cancelled = cancel_redemption(db, employee, redemption.id, expected_version=2)
    assert cancelled.status == "cancelled"
    assert list_employee_redemptions(db, employee.id) == []


def test_other_employees_redemption_is_not_found(db, make_employee, make_reward):
    owner = make_employee()
    other = make_employee()
    _fund(db, owner, 100)
    reward = make_reward(points_cost=50)
    redemption = create_redemption(db, owner, reward_id=reward.id)

    with pytest.raises(HTTPException) as exc:
        cancel_redemption(db, other, redemption.id)
    assert exc.value.status_code == 404


def test_out_of_stock_reward_is_refused(db, make_employee, make_reward):
    employee = make_employee()
    _fund(db, employee, 100)
    reward = make_reward(points_cost=50, stock=0)

    with pytest.raises(HTTPException) as exc:
        create_redemption(db, employee, reward_id=reward.id)
    assert exc.value.detail == "Reward out of stock"
