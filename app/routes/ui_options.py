from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from app.models.employee import Employee
from app.models.event_definition import EventDefinition
from app.models.reward import Reward


router = APIRouter(prefix="/ui-options", tags=["ui-options"])


@router.get("/event-types")
def list_ui_options_event_types(
    enabled: bool | None = True,
    eventType: str | None = None,
    db: Session = Depends(get_db),
):
    q = db.query(EventDefinition)
    if enabled is not None:
        q = q.filter(EventDefinition.is_enabled.is_(enabled))
    if eventType:
        q = q.filter(EventDefinition.event_type == eventType)
    items = q.order_by(EventDefinition.sort_order.asc().nullslast(), EventDefinition.name.asc()).all()
    return {
        "items": [
            {
                "id": str(d.id),
                "name": d.name,
                "points": d.points,
                "eventType": d.event_type,
                "enabled": d.is_enabled,
            }
            for d in items
        ]
    }


@router.get("/rewards")
def list_ui_options_rewards(
    active: bool | None = True,
    db: Session = Depends(get_db),
):
    q = db.query(Reward)
    if active is not None:
        q = q.filter(Reward.is_active.is_(active))
    items = q.order_by(Reward.points_cost.asc(), Reward.name.asc()).all()
    return {
        "items": [
            {
                "id": str(r.id),
                "name": r.name,
                "active": r.is_active,
                "pointsCost": r.points_cost,
                "category": r.category,
                "type": r.type,
                "stock": r.stock,
            }
            for r in items
        ]
    }


@router.get("/employees")
def list_ui_options_employees(
    active: bool | None = True,
    db: Session = Depends(get_db),
):
    q = db.query(Employee)
    if active is not None:
        q = q.filter(Employee.is_active.is_(active))
    items = q.order_by(Employee.full_name.asc()).all()
    return {
        "items": [
            {
                "id": str(e.id),
                "fullName": e.full_name,
                "position": e.position,
                "storeId": str(e.store_id) if e.store_id else None,
            }
            for e in items
        ]
    }
