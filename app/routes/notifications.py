from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.notification import Notification
from app.schemas.notification import NotificationCreate, NotificationOut
from app.services.notification_service import send_notifications


router = APIRouter(prefix="/notifications", tags=["notifications"], dependencies=[Depends(require_manager)])


@router.post("")
def send(payload: NotificationCreate, db: Session = Depends(get_db)):
    sent = send_notifications(
        db,
        title=payload.title,
        message=payload.message,
        type=payload.type,
        priority=payload.priority,
        employee_ids=payload.employee_ids,
        action_url=payload.action_url,
    )
    db.commit()
    return {"sent": len(sent)}


@router.get("", response_model=list[NotificationOut])
def list_sent(
    employeeId: UUID | None = None,
    type: str | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(Notification)
    if employeeId:
        q = q.filter(Notification.employee_id == employeeId)
    if type:
        q = q.filter(Notification.type == type)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(Notification.created_at.desc()).offset(offset).limit(limit).all()
