from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.employee_event import EmployeeEvent
from app.schemas.employee_event import EmployeeEventOut, EventSubmission, EventSubmissionOut
from app.services.event_service import submit_events


router = APIRouter(prefix="/events", tags=["events"], dependencies=[Depends(require_manager)])


@router.post("", response_model=EventSubmissionOut)
def record_events(payload: EventSubmission, db: Session = Depends(get_db)):
    return submit_events(
        db,
        employee_id=payload.employee_id,
        event_type_ids=payload.event_type_ids,
        comment=payload.comment,
        sale_amount=payload.sale_amount,
    )


@router.get("", response_model=list[EmployeeEventOut])
def list_events(
    employeeId: UUID | None = None,
    transactionType: str | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(EmployeeEvent)
    if employeeId:
        q = q.filter(EmployeeEvent.employee_id == employeeId)
    if transactionType:
        q = q.filter(EmployeeEvent.transaction_type == transactionType)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return (
        q.order_by(EmployeeEvent.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
