from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.reward_redemption import RewardRedemption
from app.schemas.reward_redemption import RedemptionDecision, RedemptionOut
from app.services.redemption_service import approve_redemption, reject_redemption


router = APIRouter(prefix="/redemptions", tags=["redemptions"], dependencies=[Depends(require_manager)])


@router.get("", response_model=list[RedemptionOut])
def list_redemptions(
    status: str | None = "pending",
    employeeId: UUID | None = None,
    limit: int = 50,
    offset: int = 0,
    db: Session = Depends(get_db),
):
    q = db.query(RewardRedemption)
    if status:
        q = q.filter(RewardRedemption.status == status)
    if employeeId:
        q = q.filter(RewardRedemption.employee_id == employeeId)

    limit = max(1, min(limit, 200))
    offset = max(0, offset)

    return q.order_by(RewardRedemption.created_at.desc()).offset(offset).limit(limit).all()


@router.post("/{redemption_id}/approve")
def approve(redemption_id: UUID, payload: RedemptionDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or RedemptionDecision()
    return approve_redemption(
        db,
        redemption_id,
        manager_notes=payload.manager_notes,
        delivered_code=payload.delivered_code,
    )


@router.post("/{redemption_id}/reject")
def reject(redemption_id: UUID, payload: RedemptionDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or RedemptionDecision()
    return reject_redemption(db, redemption_id, manager_notes=payload.manager_notes)
