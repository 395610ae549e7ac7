from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class EmployeeRequestCreate(BaseModel):
    event_type_id: UUID
    description: Optional[str] = None
    # euros
    amount: Optional[float] = None


class RequestDecision(BaseModel):
    notes: Optional[str] = None
    # euros, overrides the submitted amount
    amount: Optional[float] = None


class EmployeeRequestOut(BaseModel):
    id: UUID
    employee_id: UUID

    request_type: str
    event_type: str
    description: Optional[str] = None

    points: int
    amount: Optional[int] = None

    status: str
    notes: Optional[str] = None
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
