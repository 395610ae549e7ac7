from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class BonusDecision(BaseModel):
    notes: Optional[str] = None


class BonusRequestOut(BaseModel):
    id: UUID
    employee_id: UUID

    year: int
    month: int

    bonus_value: int
    bonus_type: str

    status: str
    notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
