from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import get_current_employee
from app.models.employee import Employee
from app.models.employee_event import EmployeeEvent
from app.models.employee_request import EmployeeRequest
from app.models.notification import Notification
from app.schemas.bonus_request import BonusRequestOut
from app.schemas.employee import EmployeeOut, PasswordChange
from app.schemas.employee_event import EmployeeEventOut
from app.schemas.employee_request import EmployeeRequestCreate, EmployeeRequestOut
from app.schemas.feedback import FeedbackCreate, FeedbackOut, KudosCreate
from app.schemas.notification import NotificationOut
from app.schemas.reward_redemption import RedemptionCancel, RedemptionCreate, RedemptionEdit, RedemptionOut
from app.services.bonus_service import get_current_bonus_request, submit_bonus_request
from app.services.employee_service import change_password
from app.services.event_service import create_employee_request
from app.services.feedback_service import received_kudos, send_feedback, send_kudos, sent_kudos
from app.services.notification_service import mark_all_read, mark_read, unread_count
from app.services.progress_service import employee_dashboard
from app.services.redemption_service import (
    cancel_redemption,
    change_redemption_reward,
    create_redemption,
    list_employee_redemptions,
)


router = APIRouter(prefix="/me", tags=["me"])


@router.get("", response_model=EmployeeOut)
def get_profile(employee: Employee = Depends(get_current_employee)):
    return employee


@router.post("/password")
def update_password(
    payload: PasswordChange,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    change_password(db, employee, current_password=payload.current_password, new_password=payload.new_password)
    return {"updated": True}


@router.get("/dashboard")
def get_dashboard(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return employee_dashboard(db, employee)


@router.get("/events", response_model=list[EmployeeEventOut])
def list_my_events(
    limit: int = 50,
    offset: int = 0,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return (
        db.query(EmployeeEvent)
        .filter(EmployeeEvent.employee_id == employee.id)
        .order_by(EmployeeEvent.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )


# ============================================================
# REQUESTS
# ============================================================
@router.post("/requests", response_model=EmployeeRequestOut)
def create_request(
    payload: EmployeeRequestCreate,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    return create_employee_request(
        db,
        employee,
        event_type_id=payload.event_type_id,
        description=payload.description,
        amount=payload.amount,
    )


@router.get("/requests", response_model=list[EmployeeRequestOut])
def list_my_requests(
    status: str | None = None,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    q = db.query(EmployeeRequest).filter(EmployeeRequest.employee_id == employee.id)
    if status:
        q = q.filter(EmployeeRequest.status == status)
    return q.order_by(EmployeeRequest.created_at.desc()).all()


# ============================================================
# REDEMPTIONS
# ============================================================
@router.post("/redemptions", response_model=RedemptionOut)
def request_reward(
    payload: RedemptionCreate,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    return create_redemption(db, employee, reward_id=payload.reward_id, notes=payload.notes)


@router.get("/redemptions", response_model=list[RedemptionOut])
def list_my_redemptions(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return list_employee_redemptions(db, employee.id)


@router.post("/redemptions/{redemption_id}/cancel", response_model=RedemptionOut)
def cancel_my_redemption(
    redemption_id: UUID,
    payload: RedemptionCancel | None = None,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    payload = payload or RedemptionCancel()
    return cancel_redemption(db, employee, redemption_id, expected_version=payload.expected_version)


@router.patch("/redemptions/{redemption_id}", response_model=RedemptionOut)
def edit_my_redemption(
    redemption_id: UUID,
    payload: RedemptionEdit,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    return change_redemption_reward(
        db,
        employee,
        redemption_id,
        reward_id=payload.reward_id,
        expected_version=payload.expected_version,
    )


# ============================================================
# BONUS REQUESTS
# ============================================================
@router.post("/bonus-requests", response_model=BonusRequestOut)
def request_bonus(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return submit_bonus_request(db, employee)


@router.get("/bonus-requests/current", response_model=BonusRequestOut | None)
def get_current_bonus(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return get_current_bonus_request(db, employee.id)


# ============================================================
# KUDOS & FEEDBACK
# ============================================================
@router.post("/kudos", response_model=FeedbackOut)
def give_kudos(
    payload: KudosCreate,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    return send_kudos(
        db,
        employee,
        recipient_id=payload.recipient_id,
        message=payload.message,
        title=payload.title,
        category=payload.category,
        rating=payload.rating,
    )


@router.get("/kudos/received", response_model=list[FeedbackOut])
def list_received_kudos(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return received_kudos(db, employee.id)


@router.get("/kudos/sent", response_model=list[FeedbackOut])
def list_sent_kudos(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return sent_kudos(db, employee.id)


@router.post("/feedback", response_model=FeedbackOut)
def give_feedback(
    payload: FeedbackCreate,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    return send_feedback(db, employee, title=payload.title, message=payload.message, category=payload.category)


# ============================================================
# NOTIFICATIONS
# ============================================================
@router.get("/notifications", response_model=list[NotificationOut])
def list_my_notifications(
    unread: bool = False,
    limit: int = 50,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    q = db.query(Notification).filter(Notification.employee_id == employee.id)
    if unread:
        q = q.filter(Notification.status != "read")

    limit = max(1, min(limit, 200))
    return q.order_by(Notification.created_at.desc()).limit(limit).all()


@router.get("/notifications/unread-count")
def get_unread_count(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    return {"count": unread_count(db, employee.id)}


@router.post("/notifications/read-all")
def read_all(employee: Employee = Depends(get_current_employee), db: Session = Depends(get_db)):
    updated = mark_all_read(db, employee.id)
    db.commit()
    return {"updated": updated}


@router.post("/notifications/{notification_id}/read", response_model=NotificationOut)
def read_one(
    notification_id: UUID,
    employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db),
):
    notification = mark_read(db, employee.id, notification_id)
    db.commit()
    db.refresh(notification)
    return notification
