import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.bonus_request import BonusRequest
from app.models.employee import Employee
from app.models.employee_request import EmployeeRequest
from app.models.feedback import EmployeeFeedback
from app.models.reward_redemption import RewardRedemption
from app.services.calendar_service import euros_to_cents, utcnow
from app.services.notification_service import notify
from app.services.points_service import lock_employee, post_points
from app.services.revenue_service import book_sale, is_sale_event
from app.services.status_service import APPROVED, PENDING, REJECTED, transition_status


logger = logging.getLogger(__name__)


# ============================================================
# APPROVE EMPLOYEE REQUEST
# ============================================================
def approve_employee_request(
    db: Session,
    request_id,
    *,
    notes: str | None = None,
    amount=None,
    approved_by: str = "manager",
    today: date | None = None,
):
    """
    Status update, ledger insert and (for sales) the weekly revenue booking
    commit together or not at all.
    """
    try:
        values = {
            "status": APPROVED,
            "approved_at": utcnow(),
            "approved_by": approved_by,
            "notes": notes,
        }
        if amount is not None:
            amount_cents = euros_to_cents(amount)
            if amount_cents < 0:
                raise HTTPException(status_code=400, detail="Amount must not be negative")
            values["amount"] = amount_cents

        request = transition_status(
            db,
            EmployeeRequest,
            request_id,
            values=values,
            not_found="Request not found",
            conflict="Request already processed",
        )

        employee = lock_employee(db, request.employee_id)
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")

        final_amount = int(request.amount or 0)
        label = request.description or request.event_type
        event_notes = f"Approved request: {label}"
        if final_amount > 0:
            event_notes += f" - Amount: €{final_amount / 100:.2f}"

        event = post_points(
            db,
            employee,
            points=request.points,
            event_type=request.event_type,
            transaction_type="EVENT",
            description=request.description,
            notes=event_notes,
            created_by=approved_by,
            source_id=request.id,
        )

        if final_amount > 0 and is_sale_event(request.event_type):
            book_sale(db, employee, final_amount, today=today)

        notify(
            db,
            employee.id,
            title="Request approved",
            message=f"{request.event_type}: {request.points:+d} points",
            type="points",
        )

        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("approval of request %s failed", request_id)
        raise HTTPException(status_code=500, detail="Could not approve request")

    db.refresh(request)
    db.refresh(event)
    logger.info("request %s approved (%+d points)", request.id, request.points)
    return request, event


def reject_employee_request(db: Session, request_id, *, notes: str | None = None, approved_by: str = "manager"):
    try:
        request = transition_status(
            db,
            EmployeeRequest,
            request_id,
            values={
                "status": REJECTED,
                "approved_at": utcnow(),
                "approved_by": approved_by,
                "notes": notes,
            },
            not_found="Request not found",
            conflict="Request already processed",
        )
        notify(
            db,
            request.employee_id,
            title="Request rejected",
            message=notes or request.event_type,
            type="info",
        )
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("rejection of request %s failed", request_id)
        raise HTTPException(status_code=500, detail="Could not reject request")

    db.refresh(request)
    logger.info("request %s rejected", request.id)
    return request


# ============================================================
# PENDING QUEUES
# ============================================================
def _names(db: Session, ids) -> dict:
    ids = {i for i in ids if i is not None}
    if not ids:
        return {}
    rows = db.query(Employee.id, Employee.full_name).filter(Employee.id.in_(ids)).all()
    return {r.id: r.full_name for r in rows}


def list_pending(db: Session) -> dict:
    requests = (
        db.query(EmployeeRequest)
        .filter(EmployeeRequest.status == PENDING)
        .order_by(EmployeeRequest.created_at.desc())
        .all()
    )
    redemptions = (
        db.query(RewardRedemption)
        .filter(RewardRedemption.status == PENDING)
        .order_by(RewardRedemption.created_at.desc())
        .all()
    )
    kudos = (
        db.query(EmployeeFeedback)
        .filter(EmployeeFeedback.feedback_type == "kudos", EmployeeFeedback.status == PENDING)
        .order_by(EmployeeFeedback.created_at.desc())
        .all()
    )
    bonuses = (
        db.query(BonusRequest)
        .filter(BonusRequest.status == PENDING)
        .order_by(BonusRequest.created_at.desc())
        .all()
    )

    names = _names(
        db,
        [r.employee_id for r in requests]
        + [r.employee_id for r in redemptions]
        + [k.employee_id for k in kudos]
        + [k.from_employee_id for k in kudos]
        + [b.employee_id for b in bonuses],
    )
    unknown = "Unknown"

    return {
        "requests": [
            {
                "id": str(r.id),
                "employeeId": str(r.employee_id),
                "employeeName": names.get(r.employee_id, unknown),
                "requestType": r.request_type,
                "eventType": r.event_type,
                "description": r.description,
                "points": r.points,
                "amount": r.amount or 0,
                "createdAt": r.created_at,
            }
            for r in requests
        ],
        "redemptions": [
            {
                "id": str(r.id),
                "employeeId": str(r.employee_id),
                "employeeName": names.get(r.employee_id, unknown),
                "rewardName": r.reward_name,
                "pointsCost": r.points_cost,
                "createdAt": r.created_at,
            }
            for r in redemptions
        ],
        "kudos": [
            {
                "id": str(k.id),
                "employeeId": str(k.employee_id),
                "employeeName": names.get(k.employee_id, unknown),
                "fromEmployeeId": str(k.from_employee_id) if k.from_employee_id else None,
                "fromEmployeeName": names.get(k.from_employee_id, unknown),
                "title": k.title,
                "message": k.message,
                "category": k.category,
                "rating": k.rating,
                "createdAt": k.created_at,
            }
            for k in kudos
        ],
        "bonuses": [
            {
                "id": str(b.id),
                "employeeId": str(b.employee_id),
                "employeeName": names.get(b.employee_id, unknown),
                "bonusValue": b.bonus_value,
                "bonusType": b.bonus_type,
                "year": b.year,
                "month": b.month,
                "createdAt": b.created_at,
            }
            for b in bonuses
        ],
    }
