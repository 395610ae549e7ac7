from app.services.points_service import (
    adjust_balance,
    get_ledger_balance,
    post_points,
    reconcile_balance,
    signed_points,
)


def test_signed_points_uses_polarity():
    assert signed_points(10, "positive") == 10
    assert signed_points(10, "negative") == -10
    assert signed_points(-10, "negative") == -10


def test_post_points_moves_balance_with_the_ledger(db, make_employee):
    employee = make_employee()

    post_points(db, employee, points=30, event_type="Upsell")
    post_points(db, employee, points=-5, event_type="Late")
    db.commit()
    db.refresh(employee)

    assert employee.points_balance == 25
    assert employee.total_earned_points == 30
    assert get_ledger_balance(db, employee.id) == 25


def test_adjust_balance_books_the_delta(db, make_employee):
    employee = make_employee()
    post_points(db, employee, points=40, event_type="Upsell")

    entry = adjust_balance(db, employee, new_balance=15, reason="correction")
    db.commit()
    db.refresh(employee)

    assert entry.transaction_type == "ADJUST"
    assert entry.points == -25
    assert employee.points_balance == 15
    assert get_ledger_balance(db, employee.id) == 15
    # adjustments are not earnings
    assert employee.total_earned_points == 40


def test_adjust_to_same_balance_writes_nothing(db, make_employee):
    employee = make_employee()
    assert adjust_balance(db, employee, new_balance=0) is None
    assert get_ledger_balance(db, employee.id) == 0


def test_reconcile_repairs_drift(db, make_employee):
    employee = make_employee()
    post_points(db, employee, points=20, event_type="Upsell")
    employee.points_balance = 99
    db.commit()

    result = reconcile_balance(db, employee)
    db.commit()
    db.refresh(employee)

    assert result["drift"] == 79
    assert result["repaired"] is True
    assert employee.points_balance == 20


def test_reconcile_without_drift(db, make_employee):
    employee = make_employee()
    post_points(db, employee, points=20, event_type="Upsell")
    db.commit()

    result = reconcile_balance(db, employee)

    assert result["drift"] == 0
    assert result["repaired"] is False
