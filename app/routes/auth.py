from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import is_manager_key
from app.schemas.employee import EmployeeOut, LoginRequest
from app.services.employee_service import verify_credentials


router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=EmployeeOut)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    employee = verify_credentials(db, payload.username, payload.password)
    if not employee:
        raise HTTPException(status_code=401, detail="Invalid username or password")
    return employee


@router.get("/is-manager")
def is_manager(x_manager_key: str | None = Header(default=None, alias="X-Manager-Key")):
    return {"isManager": is_manager_key(x_manager_key)}
