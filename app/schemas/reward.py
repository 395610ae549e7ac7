from datetime import datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field


class RewardCreate(BaseModel):
    name: str
    description: Optional[str] = None
    category: str = "general"
    type: Optional[str] = "other"
    icon: Optional[str] = None
    points_cost: int = Field(gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    is_active: bool = True


class RewardUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    icon: Optional[str] = None
    points_cost: Optional[int] = Field(default=None, gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    is_active: Optional[bool] = None


class RewardOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    category: str
    type: Optional[str] = None
    icon: Optional[str] = None
    points_cost: int
    stock: Optional[int] = None
    is_active: bool
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
