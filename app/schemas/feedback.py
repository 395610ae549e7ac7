from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class KudosCreate(BaseModel):
    recipient_id: UUID
    message: str
    title: Optional[str] = None
    category: Optional[str] = None
    rating: int = 5


class FeedbackCreate(BaseModel):
    title: str
    message: str
    category: Optional[str] = None


class FeedbackOut(BaseModel):
    id: UUID
    employee_id: UUID
    from_employee_id: Optional[UUID] = None

    feedback_type: str
    title: str
    message: str
    category: Optional[str] = None
    rating: Optional[int] = None

    status: Optional[str] = None
    approved_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
