from datetime import date, datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel, Field


class EmployeeCreate(BaseModel):
    username: str
    full_name: str
    password: str

    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    store_id: Optional[UUID] = None

    # euros
    monthly_revenue_target: Optional[float] = None

    is_active: bool = True


class EmployeeUpdate(BaseModel):
    username: Optional[str] = None
    full_name: Optional[str] = None
    password: Optional[str] = None

    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    store_id: Optional[UUID] = None

    is_active: Optional[bool] = None


class EmployeeOut(BaseModel):
    id: UUID
    username: str
    full_name: str

    email: Optional[str] = None
    phone: Optional[str] = None
    position: Optional[str] = None
    department: Optional[str] = None
    hire_date: Optional[date] = None
    store_id: Optional[UUID] = None

    is_active: bool

    points_balance: int
    total_earned_points: int

    monthly_revenue_target: int
    monthly_revenue_actual: int
    manual_revenue_override: bool

    bonus_revenue_value: Optional[int] = None
    bonus_revenue_type: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PointsAdjust(BaseModel):
    points_balance: int = Field(ge=0)
    reason: Optional[str] = None


class TargetsUpdate(BaseModel):
    # euros
    monthly_revenue_target: Optional[float] = None
    monthly_revenue_actual: Optional[float] = None
    clear_override: bool = False

    bonus_revenue_value: Optional[int] = None
    bonus_revenue_type: Optional[str] = None


class LoginRequest(BaseModel):
    username: str
    password: str


class PasswordChange(BaseModel):
    current_password: str
    new_password: str
