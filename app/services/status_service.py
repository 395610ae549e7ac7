from fastapi import HTTPException
from sqlalchemy.orm import Session


PENDING = "pending"
APPROVED = "approved"
REJECTED = "rejected"
CANCELLED = "cancelled"


def transition_status(
    db: Session,
    model,
    obj_id,
    *,
    values: dict,
    from_status: str = PENDING,
    filters: tuple = (),
    not_found: str = "Not found",
    conflict: str = "Already processed",
):
    """
    Conditional update ``WHERE id = :id AND status = :from_status``.

    Exactly one caller can win the pending -> terminal transition; everybody
    else gets a 409 and nothing is written.
    """
    obj = db.query(model).filter(model.id == obj_id, *filters).first()
    if not obj:
        raise HTTPException(status_code=404, detail=not_found)

    updated = (
        db.query(model)
        .filter(model.id == obj_id, model.status == from_status, *filters)
        .update(values, synchronize_session=False)
    )
    if not updated:
        raise HTTPException(status_code=409, detail=conflict)

    db.refresh(obj)
    return obj


def reject_nulls(model, data: dict) -> dict:
    """Refuse a partial update that would clear a NOT NULL column."""
    for column in model.__table__.columns:
        if not column.nullable and column.name in data and data[column.name] is None:
            raise HTTPException(status_code=400, detail=f"{column.name} cannot be null")
    return data
