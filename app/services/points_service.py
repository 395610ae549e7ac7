import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.employee_event import EmployeeEvent


logger = logging.getLogger(__name__)

POSITIVE = "positive"
NEGATIVE = "negative"

EARNING_TRANSACTION_TYPES = {"EVENT", "BONUS"}


def signed_points(points: int, polarity: str) -> int:
    if polarity == NEGATIVE:
        return -abs(int(points))
    return abs(int(points))


def lock_employee(db: Session, employee_id) -> Employee | None:
    return db.query(Employee).filter(Employee.id == employee_id).with_for_update().first()


# ============================================================
# POST TO LEDGER
# ============================================================
def post_points(
    db: Session,
    employee: Employee,
    *,
    points: int,
    event_type: str,
    transaction_type: str = "EVENT",
    event_type_id=None,
    description: str | None = None,
    notes: str | None = None,
    created_by: str | None = None,
    source_id=None,
) -> EmployeeEvent:
    """
    Append one ledger row and move the materialised balance by the same
    amount. Callers own the commit.
    """
    points = int(points)

    entry = EmployeeEvent(
        employee_id=employee.id,
        event_type=event_type,
        event_type_id=event_type_id,
        points=points,
        transaction_type=transaction_type,
        description=description,
        notes=notes,
        created_by=created_by,
        source_id=source_id,
    )
    db.add(entry)

    employee.points_balance = (employee.points_balance or 0) + points
    if points > 0 and transaction_type in EARNING_TRANSACTION_TYPES:
        employee.total_earned_points = (employee.total_earned_points or 0) + points

    db.flush()
    return entry


def get_ledger_balance(db: Session, employee_id) -> int:
    balance = (
        db.query(func.coalesce(func.sum(EmployeeEvent.points), 0))
        .filter(EmployeeEvent.employee_id == employee_id)
        .scalar()
    )
    return int(balance or 0)


def adjust_balance(db: Session, employee: Employee, *, new_balance: int, reason: str | None = None, created_by: str = "manager"):
    """Manual override: books the difference as an ADJUST row."""
    delta = int(new_balance) - int(employee.points_balance or 0)
    if delta == 0:
        return None

    return post_points(
        db,
        employee,
        points=delta,
        event_type="Manual adjustment",
        transaction_type="ADJUST",
        description=reason or f"Balance set to {int(new_balance)}",
        created_by=created_by,
    )


def reconcile_balance(db: Session, employee: Employee) -> dict:
    ledger_balance = get_ledger_balance(db, employee.id)
    stored = int(employee.points_balance or 0)
    drift = stored - ledger_balance

    if drift != 0:
        logger.warning(
            "points balance drift for employee %s: stored=%s ledger=%s",
            employee.id,
            stored,
            ledger_balance,
        )
        employee.points_balance = ledger_balance
        db.flush()

    return {
        "employeeId": str(employee.id),
        "storedBalance": stored,
        "ledgerBalance": ledger_balance,
        "drift": drift,
        "repaired": drift != 0,
    }
