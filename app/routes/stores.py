from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db import get_db
from app.deps.actor import require_manager
from app.models.employee import Employee
from app.models.store import Store
from app.schemas.store import StoreCreate, StoreOut, StoreUpdate
from app.services.status_service import reject_nulls


router = APIRouter(prefix="/stores", tags=["stores"], dependencies=[Depends(require_manager)])


@router.get("", response_model=list[StoreOut])
def list_stores(db: Session = Depends(get_db)):
    return db.query(Store).order_by(Store.name.asc()).all()


@router.post("", response_model=StoreOut)
def create_store(payload: StoreCreate, db: Session = Depends(get_db)):
    store = Store(name=payload.name, location=payload.location, monthly_goal=payload.monthly_goal)
    db.add(store)
    db.commit()
    db.refresh(store)
    return store


@router.patch("/{store_id}", response_model=StoreOut)
def update_store(store_id: UUID, payload: StoreUpdate, db: Session = Depends(get_db)):
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")

    for k, v in reject_nulls(Store, payload.model_dump(exclude_unset=True)).items():
        setattr(store, k, v)

    db.commit()
    db.refresh(store)
    return store


@router.delete("/{store_id}")
def delete_store(store_id: UUID, db: Session = Depends(get_db)):
    store = db.query(Store).filter(Store.id == store_id).first()
    if not store:
        raise HTTPException(status_code=404, detail="Store not found")

    # detach employees instead of failing on the foreign key
    db.query(Employee).filter(Employee.store_id == store_id).update(
        {"store_id": None}, synchronize_session=False
    )
    db.delete(store)
    db.commit()
    return {"deleted": True}
