import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session
from werkzeug.security import check_password_hash, generate_password_hash

from app.models.employee import Employee
from app.models.store import Store
from app.services.calendar_service import euros_to_cents
from app.services.status_service import reject_nulls


logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return generate_password_hash(password or "", method="pbkdf2:sha256", salt_length=16)


def verify_password(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    try:
        return check_password_hash(password_hash, password or "")
    except ValueError:
        return False


def verify_credentials(db: Session, username: str, password: str) -> Employee | None:
    employee = (
        db.query(Employee)
        .filter(Employee.username == (username or "").strip(), Employee.is_active.is_(True))
        .first()
    )
    if not employee or not verify_password(password, employee.password_hash):
        return None
    return employee


def _check_store(db: Session, store_id):
    if store_id is not None and not db.query(Store.id).filter(Store.id == store_id).first():
        raise HTTPException(status_code=404, detail="Store not found")


def create_employee(db: Session, payload) -> Employee:
    username = payload.username.strip()
    if db.query(Employee.id).filter(Employee.username == username).first():
        raise HTTPException(status_code=400, detail="Username already exists")
    if len(payload.password or "") < 4:
        raise HTTPException(status_code=400, detail="Password too short")
    _check_store(db, payload.store_id)

    employee = Employee(
        username=username,
        full_name=payload.full_name,
        password_hash=hash_password(payload.password),
        email=payload.email,
        phone=payload.phone,
        position=payload.position,
        department=payload.department,
        hire_date=payload.hire_date,
        store_id=payload.store_id,
        is_active=payload.is_active,
        points_balance=0,
        total_earned_points=0,
        monthly_revenue_target=euros_to_cents(payload.monthly_revenue_target or 0),
        monthly_revenue_actual=0,
    )
    db.add(employee)
    db.commit()
    db.refresh(employee)

    logger.info("employee %s created (%s)", employee.id, employee.username)
    return employee


def update_employee(db: Session, employee: Employee, payload) -> Employee:
    data = reject_nulls(Employee, payload.model_dump(exclude_unset=True))

    if "username" in data and data["username"] is not None:
        username = data["username"].strip()
        clash = (
            db.query(Employee.id)
            .filter(Employee.username == username)
            .filter(Employee.id != employee.id)
            .first()
        )
        if clash:
            raise HTTPException(status_code=400, detail="Username already exists")
        data["username"] = username

    if "store_id" in data:
        _check_store(db, data["store_id"])

    password = data.pop("password", None)
    if password:
        if len(password) < 4:
            raise HTTPException(status_code=400, detail="Password too short")
        employee.password_hash = hash_password(password)

    for k, v in data.items():
        setattr(employee, k, v)

    db.commit()
    db.refresh(employee)
    return employee


def change_password(db: Session, employee: Employee, *, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, employee.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")
    if len(new_password or "") < 4:
        raise HTTPException(status_code=400, detail="Password too short")

    employee.password_hash = hash_password(new_password)
    db.commit()
