from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.employee import Employee
from app.models.employee_event import EmployeeEvent
from app.schemas.employee import EmployeeCreate, EmployeeOut, EmployeeUpdate, PointsAdjust, TargetsUpdate
from app.schemas.employee_event import EmployeeEventOut
from app.services.employee_service import create_employee, update_employee
from app.services.points_service import adjust_balance, lock_employee, reconcile_balance
from app.services.progress_service import employee_dashboard, penalty_status
from app.services.revenue_service import update_targets


router = APIRouter(prefix="/employees", tags=["employees"], dependencies=[Depends(require_manager)])


def _get_employee(db: Session, employee_id: UUID) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


@router.get("", response_model=list[EmployeeOut])
def list_employees(
    active: bool | None = None,
    storeId: UUID | None = None,
    db: Session = Depends(get_db),
):
    q = db.query(Employee)
    if active is not None:
        q = q.filter(Employee.is_active.is_(active))
    if storeId:
        q = q.filter(Employee.store_id == storeId)
    return q.order_by(Employee.full_name.asc()).all()


@router.post("", response_model=EmployeeOut)
def create(payload: EmployeeCreate, db: Session = Depends(get_db)):
    return create_employee(db, payload)


@router.get("/{employee_id}", response_model=EmployeeOut)
def get_employee(employee_id: UUID, db: Session = Depends(get_db)):
    return _get_employee(db, employee_id)


@router.patch("/{employee_id}", response_model=EmployeeOut)
def update(employee_id: UUID, payload: EmployeeUpdate, db: Session = Depends(get_db)):
    employee = _get_employee(db, employee_id)
    return update_employee(db, employee, payload)


@router.get("/{employee_id}/events", response_model=list[EmployeeEventOut])
def list_employee_events(
    employee_id: UUID,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    _get_employee(db, employee_id)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return (
        db.query(EmployeeEvent)
        .filter(EmployeeEvent.employee_id == employee_id)
        .order_by(EmployeeEvent.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


@router.post("/{employee_id}/points/adjust", response_model=EmployeeOut)
def adjust_points(employee_id: UUID, payload: PointsAdjust, db: Session = Depends(get_db)):
    _get_employee(db, employee_id)
    employee = lock_employee(db, employee_id)
    adjust_balance(db, employee, new_balance=payload.points_balance, reason=payload.reason)
    db.commit()
    db.refresh(employee)
    return employee


@router.post("/{employee_id}/points/reconcile")
def reconcile_points(employee_id: UUID, db: Session = Depends(get_db)):
    _get_employee(db, employee_id)
    employee = lock_employee(db, employee_id)
    result = reconcile_balance(db, employee)
    db.commit()
    return result


@router.put("/{employee_id}/targets", response_model=EmployeeOut)
def set_targets(employee_id: UUID, payload: TargetsUpdate, db: Session = Depends(get_db)):
    employee = _get_employee(db, employee_id)
    update_targets(
        db,
        employee,
        monthly_target_euros=payload.monthly_revenue_target,
        actual_euros=payload.monthly_revenue_actual,
        clear_override=payload.clear_override,
        bonus_value=payload.bonus_revenue_value,
        bonus_type=payload.bonus_revenue_type,
    )
    db.commit()
    db.refresh(employee)
    return employee


@router.get("/{employee_id}/dashboard")
def get_dashboard(employee_id: UUID, db: Session = Depends(get_db)):
    return employee_dashboard(db, _get_employee(db, employee_id))


@router.get("/{employee_id}/penalty-status")
def get_penalty_status(employee_id: UUID, db: Session = Depends(get_db)):
    return penalty_status(db, _get_employee(db, employee_id))
