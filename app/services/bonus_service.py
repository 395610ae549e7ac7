import logging
from datetime import date

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.bonus_request import BonusRequest
from app.models.employee import Employee
from app.services.calendar_service import today as utc_today, utcnow
from app.services.notification_service import notify
from app.services.points_service import lock_employee, post_points
from app.services.status_service import APPROVED, PENDING, REJECTED, transition_status


logger = logging.getLogger(__name__)


def target_reached(employee: Employee) -> bool:
    target = int(employee.monthly_revenue_target or 0)
    return target > 0 and int(employee.monthly_revenue_actual or 0) >= target


def get_current_bonus_request(db: Session, employee_id, *, today: date | None = None) -> BonusRequest | None:
    current = today or utc_today()
    return (
        db.query(BonusRequest)
        .filter(
            BonusRequest.employee_id == employee_id,
            BonusRequest.year == current.year,
            BonusRequest.month == current.month,
        )
        .first()
    )


def submit_bonus_request(db: Session, employee: Employee, *, today: date | None = None) -> BonusRequest:
    current = today or utc_today()

    if not employee.bonus_revenue_value:
        raise HTTPException(status_code=400, detail="No revenue bonus configured")
    if not target_reached(employee):
        raise HTTPException(status_code=400, detail="Monthly revenue target not reached")
    if get_current_bonus_request(db, employee.id, today=current):
        raise HTTPException(status_code=409, detail="Bonus already requested for this month")

    bonus = BonusRequest(
        employee_id=employee.id,
        year=current.year,
        month=current.month,
        bonus_value=int(employee.bonus_revenue_value),
        bonus_type=employee.bonus_revenue_type or "EUR",
        status=PENDING,
    )
    db.add(bonus)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="Bonus already requested for this month")

    db.refresh(bonus)
    logger.info("bonus request %s submitted by employee %s", bonus.id, employee.id)
    return bonus


def approve_bonus_request(db: Session, bonus_id, *, notes: str | None = None, approved_by: str = "manager") -> BonusRequest:
    """POINTS bonuses land in the ledger; EUR bonuses are a payout record."""
    try:
        bonus = transition_status(
            db,
            BonusRequest,
            bonus_id,
            values={
                "status": APPROVED,
                "approved_at": utcnow(),
                "approved_by": approved_by,
                "notes": notes,
            },
            not_found="Bonus request not found",
            conflict="Bonus request already processed",
        )

        if bonus.bonus_type == "POINTS":
            employee = lock_employee(db, bonus.employee_id)
            if not employee:
                raise HTTPException(status_code=404, detail="Employee not found")
            post_points(
                db,
                employee,
                points=bonus.bonus_value,
                event_type="Revenue bonus",
                transaction_type="BONUS",
                description=f"Revenue bonus {bonus.month:02d}/{bonus.year}",
                notes=notes,
                created_by=approved_by,
                source_id=bonus.id,
            )
            message = f"+{bonus.bonus_value} points"
        else:
            message = f"€{bonus.bonus_value} payout"

        notify(db, bonus.employee_id, title="Bonus approved", message=message, type="goal")
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("approval of bonus request %s failed", bonus_id)
        raise HTTPException(status_code=500, detail="Could not approve bonus")

    db.refresh(bonus)
    logger.info("bonus request %s approved (%s %s)", bonus.id, bonus.bonus_value, bonus.bonus_type)
    return bonus


def reject_bonus_request(db: Session, bonus_id, *, notes: str | None = None, approved_by: str = "manager") -> BonusRequest:
    try:
        bonus = transition_status(
            db,
            BonusRequest,
            bonus_id,
            values={
                "status": REJECTED,
                "approved_at": utcnow(),
                "approved_by": approved_by,
                "notes": notes,
            },
            not_found="Bonus request not found",
            conflict="Bonus request already processed",
        )
        notify(
            db,
            bonus.employee_id,
            title="Bonus rejected",
            message=notes or f"Bonus for {bonus.month:02d}/{bonus.year}",
            type="info",
        )
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("rejection of bonus request %s failed", bonus_id)
        raise HTTPException(status_code=500, detail="Could not reject bonus")

    db.refresh(bonus)
    logger.info("bonus request %s rejected", bonus.id)
    return bonus
