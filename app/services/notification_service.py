import logging

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.notification import Notification
from app.services.calendar_service import utcnow


logger = logging.getLogger(__name__)

NOTIFICATION_TYPES = {"achievement", "points", "goal", "warning", "info"}
PRIORITIES = {"normal", "urgent"}


def notify(
    db: Session,
    employee_id,
    *,
    title: str,
    message: str,
    type: str = "info",
    priority: str = "normal",
    action_url: str | None = None,
    created_by: str | None = "system",
) -> Notification:
    notification = Notification(
        employee_id=employee_id,
        title=title,
        message=message,
        type=type,
        priority=priority,
        status="sent",
        action_url=action_url,
        created_by=created_by,
    )
    db.add(notification)
    db.flush()
    return notification


def send_notifications(
    db: Session,
    *,
    title: str,
    message: str,
    type: str = "info",
    priority: str = "normal",
    employee_ids: list | None = None,
    action_url: str | None = None,
    created_by: str = "manager",
) -> list[Notification]:
    """
    Fan a manager message out to the given employees, or to every active
    employee when no recipients are given.
    """
    if type not in NOTIFICATION_TYPES:
        raise HTTPException(status_code=400, detail=f"Unknown notification type: {type}")
    if priority not in PRIORITIES:
        raise HTTPException(status_code=400, detail=f"Unknown priority: {priority}")
    if not title.strip() or not message.strip():
        raise HTTPException(status_code=400, detail="title and message are required")

    q = db.query(Employee.id).filter(Employee.is_active.is_(True))
    if employee_ids:
        q = q.filter(Employee.id.in_(employee_ids))
    recipients = [row.id for row in q.all()]

    if employee_ids and len(recipients) != len(set(employee_ids)):
        raise HTTPException(status_code=404, detail="Employee not found")
    if not recipients:
        raise HTTPException(status_code=400, detail="No recipients")

    sent = [
        notify(
            db,
            employee_id,
            title=title,
            message=message,
            type=type,
            priority=priority,
            action_url=action_url,
            created_by=created_by,
        )
        for employee_id in recipients
    ]
    logger.info("sent notification %r to %s employees", title, len(sent))
    return sent


def mark_read(db: Session, employee_id, notification_id) -> Notification:
    notification = (
        db.query(Notification)
        .filter(Notification.id == notification_id, Notification.employee_id == employee_id)
        .first()
    )
    if not notification:
        raise HTTPException(status_code=404, detail="Notification not found")

    if notification.status != "read":
        notification.status = "read"
        notification.read_at = utcnow()
        db.flush()
    return notification


def mark_all_read(db: Session, employee_id) -> int:
    now = utcnow()
    count = (
        db.query(Notification)
        .filter(Notification.employee_id == employee_id, Notification.status != "read")
        .update({"status": "read", "read_at": now}, synchronize_session=False)
    )
    db.flush()
    return int(count or 0)


def unread_count(db: Session, employee_id) -> int:
    return (
        db.query(Notification)
        .filter(Notification.employee_id == employee_id, Notification.status != "read")
        .count()
    )
