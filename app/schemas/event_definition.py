from datetime import datetime
from typing import Literal, Optional

from uuid import UUID

from pydantic import BaseModel, Field


class EventDefinitionCreate(BaseModel):
    name: str
    points: int = Field(ge=0)
    event_type: Literal["positive", "negative"]
    is_enabled: bool = True
    sort_order: Optional[int] = None


class EventDefinitionUpdate(BaseModel):
    name: Optional[str] = None
    points: Optional[int] = Field(default=None, ge=0)
    event_type: Optional[Literal["positive", "negative"]] = None
    is_enabled: Optional[bool] = None
    sort_order: Optional[int] = None


class EventDefinitionOut(BaseModel):
    id: UUID
    name: str
    points: int
    event_type: str
    is_enabled: bool
    sort_order: Optional[int] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
