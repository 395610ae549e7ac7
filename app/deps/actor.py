import hmac
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app import settings
from app.db import get_db
from app.models.employee import Employee


def get_current_employee_id(
    x_employee_id: str | None = Header(default=None, alias="X-Employee-Id"),
) -> UUID:
    if not x_employee_id:
        raise HTTPException(
            status_code=400,
            detail="Missing employee context. Provide X-Employee-Id header.",
        )
    try:
        return UUID(x_employee_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="X-Employee-Id is not a valid id")


def get_current_employee(
    employee_id: UUID = Depends(get_current_employee_id),
    db: Session = Depends(get_db),
) -> Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee or not employee.is_active:
        raise HTTPException(status_code=404, detail="Employee not found")
    return employee


def is_manager_key(key: str | None) -> bool:
    if not key or not settings.MANAGER_API_KEY:
        return False
    return hmac.compare_digest(key, settings.MANAGER_API_KEY)


def require_manager(
    x_manager_key: str | None = Header(default=None, alias="X-Manager-Key"),
) -> str:
    if not is_manager_key(x_manager_key):
        raise HTTPException(status_code=403, detail="Manager access required")
    return "manager"
