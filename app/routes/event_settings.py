from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.employee_event import EmployeeEvent
from app.models.event_definition import EventDefinition
from app.schemas.event_definition import EventDefinitionCreate, EventDefinitionOut, EventDefinitionUpdate
from app.services.status_service import reject_nulls


router = APIRouter(
    prefix="/admin/events-settings",
    tags=["admin-events-settings"],
    dependencies=[Depends(require_manager)],
)


def _name_taken(db: Session, name: str, exclude_id=None) -> bool:
    q = db.query(EventDefinition.id).filter(EventDefinition.name == name)
    if exclude_id is not None:
        q = q.filter(EventDefinition.id != exclude_id)
    return q.first() is not None


@router.get("", response_model=list[EventDefinitionOut])
def list_event_definitions(
    enabled: bool | None = None,
    eventType: str | None = None,
    db: Session = Depends(get_db),
):
    q = db.query(EventDefinition)
    if enabled is not None:
        q = q.filter(EventDefinition.is_enabled.is_(enabled))
    if eventType:
        q = q.filter(EventDefinition.event_type == eventType)
    return q.order_by(EventDefinition.sort_order.asc().nullslast(), EventDefinition.name.asc()).all()


@router.post("", response_model=EventDefinitionOut)
def create_event_definition(payload: EventDefinitionCreate, db: Session = Depends(get_db)):
    if _name_taken(db, payload.name):
        raise HTTPException(status_code=400, detail="Event name already exists")

    obj = EventDefinition(
        name=payload.name,
        points=payload.points,
        event_type=payload.event_type,
        is_enabled=payload.is_enabled,
        sort_order=payload.sort_order,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@router.get("/{definition_id}", response_model=EventDefinitionOut)
def get_event_definition(definition_id: UUID, db: Session = Depends(get_db)):
    obj = db.query(EventDefinition).filter(EventDefinition.id == definition_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Event type not found")
    return obj


@router.patch("/{definition_id}", response_model=EventDefinitionOut)
def update_event_definition(definition_id: UUID, payload: EventDefinitionUpdate, db: Session = Depends(get_db)):
    obj = db.query(EventDefinition).filter(EventDefinition.id == definition_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Event type not found")

    data = reject_nulls(EventDefinition, payload.model_dump(exclude_unset=True))
    if data.get("name") and data["name"] != obj.name and _name_taken(db, data["name"], obj.id):
        raise HTTPException(status_code=400, detail="Event name already exists")

    for k, v in data.items():
        setattr(obj, k, v)

    db.commit()
    db.refresh(obj)
    return obj


@router.delete("/{definition_id}")
def delete_event_definition(definition_id: UUID, db: Session = Depends(get_db)):
    obj = db.query(EventDefinition).filter(EventDefinition.id == definition_id).first()
    if not obj:
        raise HTTPException(status_code=404, detail="Event type not found")

    in_use = db.query(EmployeeEvent.id).filter(EmployeeEvent.event_type_id == definition_id).first()
    if in_use:
        raise HTTPException(status_code=400, detail="Event type is referenced by the ledger; disable it instead")

    db.delete(obj)
    db.commit()
    return {"deleted": True}
