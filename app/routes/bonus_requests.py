from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.bonus_request import BonusRequest
from app.schemas.bonus_request import BonusDecision, BonusRequestOut
from app.services.bonus_service import approve_bonus_request, reject_bonus_request


router = APIRouter(prefix="/bonus-requests", tags=["bonus-requests"], dependencies=[Depends(require_manager)])


@router.get("", response_model=list[BonusRequestOut])
def list_bonus_requests(
    status: str | None = None,
    year: int | None = None,
    month: int | None = None,
    db: Session = Depends(get_db),
):
    q = db.query(BonusRequest)
    if status:
        q = q.filter(BonusRequest.status == status)
    if year:
        q = q.filter(BonusRequest.year == year)
    if month:
        q = q.filter(BonusRequest.month == month)
    return q.order_by(BonusRequest.created_at.desc()).all()


@router.post("/{bonus_id}/approve", response_model=BonusRequestOut)
def approve(bonus_id: UUID, payload: BonusDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or BonusDecision()
    return approve_bonus_request(db, bonus_id, notes=payload.notes)


@router.post("/{bonus_id}/reject", response_model=BonusRequestOut)
def reject(bonus_id: UUID, payload: BonusDecision | None = None, db: Session = Depends(get_db)):
    payload = payload or BonusDecision()
    return reject_bonus_request(db, bonus_id, notes=payload.notes)
