from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class RedemptionCreate(BaseModel):
    reward_id: UUID
    notes: Optional[str] = None


class RedemptionEdit(BaseModel):
    reward_id: UUID
    expected_version: Optional[int] = None


class RedemptionCancel(BaseModel):
    expected_version: Optional[int] = None


class RedemptionDecision(BaseModel):
    manager_notes: Optional[str] = None
    delivered_code: Optional[str] = None


class RedemptionOut(BaseModel):
    id: UUID
    employee_id: UUID
    reward_id: Optional[UUID] = None

    reward_name: str
    points_cost: int

    status: str
    version: int

    notes: Optional[str] = None
    manager_comment: Optional[str] = None
    delivered_code: Optional[str] = None

    approved_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
