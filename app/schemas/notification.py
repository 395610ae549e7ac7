from datetime import datetime
from typing import List, Optional

from uuid import UUID

from pydantic import BaseModel


class NotificationCreate(BaseModel):
    title: str
    message: str
    type: str = "info"
    priority: str = "normal"
    action_url: Optional[str] = None
    # empty = every active employee
    employee_ids: Optional[List[UUID]] = None


class NotificationOut(BaseModel):
    id: UUID
    employee_id: UUID

    title: str
    message: str
    type: str
    priority: str
    status: str

    action_url: Optional[str] = None
    created_by: Optional[str] = None
    read_at: Optional[datetime] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
