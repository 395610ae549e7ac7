from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.feedback import EmployeeFeedback
from app.schemas.feedback import FeedbackOut
from app.services.feedback_service import decide_kudos


router = APIRouter(prefix="/feedback", tags=["feedback"], dependencies=[Depends(require_manager)])


@router.get("", response_model=list[FeedbackOut])
def list_feedback(
    feedbackType: str | None = None,
    status: str | None = None,
    employeeId: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(EmployeeFeedback)
    if feedbackType:
        q = q.filter(EmployeeFeedback.feedback_type == feedbackType)
    if status:
        q = q.filter(EmployeeFeedback.status == status)
    if employeeId:
        q = q.filter(EmployeeFeedback.employee_id == employeeId)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(EmployeeFeedback.created_at.desc()).offset(offset).limit(limit).all()


@router.post("/{kudos_id}/approve", response_model=FeedbackOut)
def approve(kudos_id: UUID, db: Session = Depends(get_db)):
    return decide_kudos(db, kudos_id, approve=True)


@router.post("/{kudos_id}/reject", response_model=FeedbackOut)
def reject(kudos_id: UUID, db: Session = Depends(get_db)):
    return decide_kudos(db, kudos_id, approve=False)
