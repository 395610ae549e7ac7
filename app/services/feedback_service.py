import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.feedback import EmployeeFeedback
from app.services.calendar_service import utcnow
from app.services.notification_service import notify
from app.services.status_service import APPROVED, PENDING, REJECTED, transition_status


logger = logging.getLogger(__name__)


KUDOS_CATEGORIES = {"teamwork", "quality", "customer_service", "innovation", "leadership", "general"}


def send_kudos(
    db: Session,
    sender: Employee,
    *,
    recipient_id,
    message: str,
    title: str | None = None,
    category: str | None = None,
    rating: int = 5,
) -> EmployeeFeedback:
    if recipient_id == sender.id:
        raise HTTPException(status_code=400, detail="Cannot send kudos to yourself")

    recipient = db.query(Employee).filter(Employee.id == recipient_id).first()
    if not recipient or not recipient.is_active:
        raise HTTPException(status_code=404, detail="Employee not found")

    if not (message or "").strip():
        raise HTTPException(status_code=400, detail="message is required")
    if rating < 1 or rating > 5:
        raise HTTPException(status_code=400, detail="rating must be between 1 and 5")

    category = category or "teamwork"
    if category not in KUDOS_CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")

    kudos = EmployeeFeedback(
        employee_id=recipient.id,
        from_employee_id=sender.id,
        feedback_type="kudos",
        title=(title or "").strip() or "Kudos from a colleague",
        message=message.strip(),
        category=category,
        rating=rating,
        status=PENDING,
    )
    db.add(kudos)
    db.commit()
    db.refresh(kudos)
    return kudos


def send_feedback(db: Session, sender: Employee, *, title: str, message: str, category: str | None = None) -> EmployeeFeedback:
    if not (title or "").strip() or not (message or "").strip():
        raise HTTPException(status_code=400, detail="title and message are required")

    feedback = EmployeeFeedback(
        employee_id=sender.id,
        from_employee_id=sender.id,
        feedback_type="feedback",
        title=title.strip(),
        message=message.strip(),
        category=category or "general",
    )
    db.add(feedback)
    db.commit()
    db.refresh(feedback)
    return feedback


def decide_kudos(db: Session, kudos_id, *, approve: bool, approved_by: str = "manager") -> EmployeeFeedback:
    try:
        kudos = transition_status(
            db,
            EmployeeFeedback,
            kudos_id,
            values={
                "status": APPROVED if approve else REJECTED,
                "approved_at": utcnow(),
                "approved_by": approved_by,
            },
            filters=(EmployeeFeedback.feedback_type == "kudos",),
            not_found="Kudos not found",
            conflict="Kudos already processed",
        )
        if approve:
            notify(db, kudos.employee_id, title="You received kudos", message=kudos.title, type="achievement")
        elif kudos.from_employee_id:
            notify(db, kudos.from_employee_id, title="Kudos not approved", message=kudos.title, type="info")
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("decision on kudos %s failed", kudos_id)
        raise HTTPException(status_code=500, detail="Could not process kudos")

    db.refresh(kudos)
    return kudos


def received_kudos(db: Session, employee_id):
    return (
        db.query(EmployeeFeedback)
        .filter(
            EmployeeFeedback.employee_id == employee_id,
            EmployeeFeedback.feedback_type == "kudos",
            EmployeeFeedback.status == APPROVED,
        )
        .order_by(EmployeeFeedback.created_at.desc())
        .all()
    )


def sent_kudos(db: Session, employee_id):
    return (
        db.query(EmployeeFeedback)
        .filter(
            EmployeeFeedback.from_employee_id == employee_id,
            EmployeeFeedback.feedback_type == "kudos",
        )
        .order_by(EmployeeFeedback.created_at.desc())
        .all()
    )
