from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class StoreCreate(BaseModel):
    name: str
    location: Optional[str] = None
    # cents
    monthly_goal: Optional[int] = None


class StoreUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    monthly_goal: Optional[int] = None


class StoreOut(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    monthly_goal: Optional[int] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
