from datetime import datetime
from typing import List, Optional

from uuid import UUID

from pydantic import BaseModel, Field


class EventSubmission(BaseModel):
    employee_id: UUID
    event_type_ids: List[UUID] = Field(default_factory=list)
    comment: Optional[str] = None
    # euros
    sale_amount: Optional[float] = None


class EmployeeEventOut(BaseModel):
    id: UUID
    employee_id: UUID

    event_type: str
    event_type_id: Optional[UUID] = None

    points: int
    transaction_type: str

    description: Optional[str] = None
    notes: Optional[str] = None
    created_by: Optional[str] = None
    source_id: Optional[UUID] = None

    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class EventSubmissionOut(BaseModel):
    employee_id: UUID
    total_points: int
    events: List[EmployeeEventOut]
    sale_request_id: Optional[UUID] = None
