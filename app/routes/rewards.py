from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.reward import Reward
from app.models.reward_redemption import RewardRedemption
from app.schemas.reward import RewardCreate, RewardUpdate, RewardOut
from app.services.status_service import reject_nulls


router = APIRouter(prefix="/rewards", tags=["rewards"])


@router.get("", response_model=list[RewardOut])
def list_rewards(
    active: bool | None = None,
    category: str | None = None,
    type: str | None = None,
    db: Session = Depends(get_db),
):
    q = db.query(Reward)
    if active is not None:
        q = q.filter(Reward.is_active.is_(active))
    if category:
        q = q.filter(Reward.category == category)
    if type:
        q = q.filter(Reward.type == type)
    return q.order_by(Reward.points_cost.asc(), Reward.name.asc()).all()


@router.post("", response_model=RewardOut)
def create_reward(
    payload: RewardCreate,
    manager: str = Depends(require_manager),
    db: Session = Depends(get_db),
):
    reward = Reward(
        name=payload.name,
        description=payload.description,
        category=payload.category,
        type=payload.type,
        icon=payload.icon,
        points_cost=payload.points_cost,
        stock=payload.stock,
        is_active=payload.is_active,
    )
    db.add(reward)
    db.commit()
    db.refresh(reward)
    return reward


@router.get("/{reward_id}", response_model=RewardOut)
def get_reward(reward_id: UUID, db: Session = Depends(get_db)):
    reward = db.query(Reward).filter(Reward.id == reward_id).first()
    if not reward:
        raise HTTPException(status_code=404, detail="Reward not found")
    return reward


@router.patch("/{reward_id}", response_model=RewardOut)
def update_reward(
    reward_id: UUID,
    payload: RewardUpdate,
    manager: str = Depends(require_manager),
    db: Session = Depends(get_db),
):
    reward = db.query(Reward).filter(Reward.id == reward_id).first()
    if not reward:
        raise HTTPException(status_code=404, detail="Reward not found")

    for k, v in reject_nulls(Reward, payload.model_dump(exclude_unset=True)).items():
        setattr(reward, k, v)

    db.commit()
    db.refresh(reward)
    return reward


@router.delete("/{reward_id}")
def delete_reward(
    reward_id: UUID,
    manager: str = Depends(require_manager),
    db: Session = Depends(get_db),
):
    reward = db.query(Reward).filter(Reward.id == reward_id).first()
    if not reward:
        raise HTTPException(status_code=404, detail="Reward not found")

    # redemptions keep reward_name, so history survives the catalog entry
    db.query(RewardRedemption).filter(RewardRedemption.reward_id == reward_id).update(
        {"reward_id": None}, synchronize_session=False
    )
    db.delete(reward)
    db.commit()
    return {"deleted": True}
