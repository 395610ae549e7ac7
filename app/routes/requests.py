from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.employee_request import EmployeeRequest
from app.schemas.employee_event import EmployeeEventOut
from app.schemas.employee_request import EmployeeRequestOut, RequestDecision
from app.services.approval_service import approve_employee_request, reject_employee_request


router = APIRouter(prefix="/requests", tags=["requests"], dependencies=[Depends(require_manager)])


@router.get("", response_model=list[EmployeeRequestOut])
def list_requests(
    status: str | None = "pending",
    employeeId: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(EmployeeRequest)
    if status:
        q = q.filter(EmployeeRequest.status == status)
    if employeeId:
        q = q.filter(EmployeeRequest.employee_id == employeeId)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(EmployeeRequest.created_at.desc()).offset(offset).limit(limit).all()


@router.post("/{request_id}/approve")
def approve(request_id: UUID, payload: RequestDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or RequestDecision()
    request, event = approve_employee_request(db, request_id, notes=payload.notes, amount=payload.amount)
    return {
        "request": EmployeeRequestOut.model_validate(request),
        "event": EmployeeEventOut.model_validate(event),
    }


@router.post("/{request_id}/reject", response_model=EmployeeRequestOut)
def reject(request_id: UUID, payload: RequestDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or RequestDecision()
    return reject_employee_request(db, request_id, notes=payload.notes)
