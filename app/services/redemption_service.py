import logging

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.employee import Employee
from app.models.reward import Reward
from app.models.reward_redemption import RewardRedemption
from app.services.calendar_service import utcnow
from app.services.notification_service import notify
from app.services.points_service import lock_employee, post_points
from app.services.status_service import APPROVED, CANCELLED, PENDING, REJECTED, transition_status


logger = logging.getLogger(__name__)

ALREADY_PROCESSED = "Redemption already processed"


def _get_active_reward(db: Session, reward_id) -> Reward:
    reward = (
        db.query(Reward)
        .filter(Reward.id == reward_id, Reward.is_active.is_(True))
        .first()
    )
    if not reward:
        raise HTTPException(status_code=404, detail="Reward not found")
    return reward


def _check_affordable(employee: Employee, reward: Reward):
    balance = int(employee.points_balance or 0)
    if balance < reward.points_cost:
        raise HTTPException(
            status_code=400,
            detail=f"Not enough points: {reward.points_cost - balance} more needed",
        )
    if reward.stock is not None and reward.stock <= 0:
        raise HTTPException(status_code=400, detail="Reward out of stock")


# ============================================================
# EMPLOYEE SIDE
# ============================================================
def create_redemption(db: Session, employee: Employee, *, reward_id, notes: str | None = None) -> RewardRedemption:
    reward = _get_active_reward(db, reward_id)
    _check_affordable(employee, reward)

    redemption = RewardRedemption(
        employee_id=employee.id,
        reward_id=reward.id,
        reward_name=reward.name,
        points_cost=reward.points_cost,
        status=PENDING,
        version=1,
        notes=notes,
    )
    db.add(redemption)
    db.commit()
    db.refresh(redemption)

    logger.info("employee %s requested reward %s (%s points)", employee.id, reward.id, reward.points_cost)
    return redemption


def _guarded_update(db: Session, employee: Employee, redemption_id, values: dict, expected_version: int | None):
    """
    ``UPDATE ... WHERE status = 'pending' AND version = :v``; a redemption
    that moved on since the caller last saw it is left untouched.
    """
    redemption = (
        db.query(RewardRedemption)
        .filter(RewardRedemption.id == redemption_id, RewardRedemption.employee_id == employee.id)
        .first()
    )
    if not redemption:
        raise HTTPException(status_code=404, detail="Redemption not found")

    q = db.query(RewardRedemption).filter(
        RewardRedemption.id == redemption_id,
        RewardRedemption.employee_id == employee.id,
        RewardRedemption.status == PENDING,
    )
    if expected_version is not None:
        q = q.filter(RewardRedemption.version == expected_version)

    values = dict(values)
    values["version"] = RewardRedemption.version + 1

    updated = q.update(values, synchronize_session=False)
    if not updated:
        db.rollback()
        raise HTTPException(status_code=409, detail=ALREADY_PROCESSED)

    db.commit()
    db.refresh(redemption)
    return redemption


def cancel_redemption(db: Session, employee: Employee, redemption_id, *, expected_version: int | None = None):
    redemption = _guarded_update(
        db,
        employee,
        redemption_id,
        {"status": CANCELLED, "decided_at": utcnow()},
        expected_version,
    )
    logger.info("redemption %s cancelled by employee %s", redemption.id, employee.id)
    return redemption


def change_redemption_reward(
    db: Session,
    employee: Employee,
    redemption_id,
    *,
    reward_id,
    expected_version: int | None = None,
):
    reward = _get_active_reward(db, reward_id)
    _check_affordable(employee, reward)

    return _guarded_update(
        db,
        employee,
        redemption_id,
        {
            "reward_id": reward.id,
            "reward_name": reward.name,
            "points_cost": reward.points_cost,
        },
        expected_version,
    )


def list_employee_redemptions(db: Session, employee_id, *, include_cancelled: bool = False):
    q = db.query(RewardRedemption).filter(RewardRedemption.employee_id == employee_id)
    if not include_cancelled:
        q = q.filter(RewardRedemption.status != CANCELLED)
    return q.order_by(RewardRedemption.created_at.desc()).all()


# ============================================================
# MANAGER SIDE (atomic approve / reject)
# ============================================================
def approve_redemption(
    db: Session,
    redemption_id,
    *,
    manager_notes: str | None = None,
    delivered_code: str | None = None,
    approved_by: str = "manager",
) -> dict:
    """
    Balance check, point deduction, stock decrement and status change in a
    single transaction. Insufficient balance leaves everything untouched.
    """
    try:
        redemption = (
            db.query(RewardRedemption)
            .filter(RewardRedemption.id == redemption_id)
            .with_for_update()
            .first()
        )
        if not redemption:
            raise HTTPException(status_code=404, detail="Redemption not found")
        if redemption.status != PENDING:
            raise HTTPException(status_code=409, detail=ALREADY_PROCESSED)

        employee = lock_employee(db, redemption.employee_id)
        if not employee:
            raise HTTPException(status_code=404, detail="Employee not found")

        if int(employee.points_balance or 0) < redemption.points_cost:
            raise HTTPException(status_code=400, detail="Not enough points")

        if redemption.reward_id is not None:
            reward = db.query(Reward).filter(Reward.id == redemption.reward_id).with_for_update().first()
            if reward and reward.stock is not None:
                if reward.stock <= 0:
                    raise HTTPException(status_code=400, detail="Reward out of stock")
                reward.stock -= 1

        now = utcnow()
        redemption = transition_status(
            db,
            RewardRedemption,
            redemption.id,
            values={
                "status": APPROVED,
                "approved_at": now,
                "approved_by": approved_by,
                "decided_at": now,
                "manager_comment": manager_notes,
                "delivered_code": delivered_code,
            },
            not_found="Redemption not found",
            conflict=ALREADY_PROCESSED,
        )

        post_points(
            db,
            employee,
            points=-redemption.points_cost,
            event_type=f"Reward: {redemption.reward_name}",
            transaction_type="REDEMPTION",
            description=f"Redeemed {redemption.reward_name}",
            notes=manager_notes,
            created_by=approved_by,
            source_id=redemption.id,
        )

        notify(
            db,
            employee.id,
            title="Reward approved",
            message=f"{redemption.reward_name} (-{redemption.points_cost} points)",
            type="achievement",
        )

        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("approval of redemption %s failed", redemption_id)
        raise HTTPException(status_code=500, detail="Could not approve redemption")

    db.refresh(employee)
    logger.info("redemption %s approved, new balance %s", redemption.id, employee.points_balance)

    return {
        "success": True,
        "redemption_id": str(redemption.id),
        "status": APPROVED,
        "new_balance": employee.points_balance,
    }


def reject_redemption(db: Session, redemption_id, *, manager_notes: str | None = None, approved_by: str = "manager") -> dict:
    try:
        redemption = transition_status(
            db,
            RewardRedemption,
            redemption_id,
            values={
                "status": REJECTED,
                "decided_at": utcnow(),
                "approved_by": approved_by,
                "manager_comment": manager_notes,
            },
            not_found="Redemption not found",
            conflict=ALREADY_PROCESSED,
        )
        notify(
            db,
            redemption.employee_id,
            title="Reward rejected",
            message=manager_notes or redemption.reward_name,
            type="info",
        )
        db.commit()
    except HTTPException:
        db.rollback()
        raise
    except SQLAlchemyError:
        db.rollback()
        logger.exception("rejection of redemption %s failed", redemption_id)
        raise HTTPException(status_code=500, detail="Could not reject redemption")

    employee = db.query(Employee).filter(Employee.id == redemption.employee_id).first()
    logger.info("redemption %s rejected", redemption.id)

    return {
        "success": True,
        "redemption_id": str(redemption.id),
        "status": REJECTED,
        "new_balance": employee.points_balance if employee else None,
    }
