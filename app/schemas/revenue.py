from datetime import date, datetime
from typing import Optional

from uuid import UUID

from pydantic import BaseModel


class WeeklyRevenueIn(BaseModel):
    employee_id: UUID
    week_start_date: date
    # euros
    amount: float


class DailyRevenueIn(BaseModel):
    employee_id: UUID
    date: date
    # euros
    amount: float
    notes: Optional[str] = None


class WeeklyRevenueOut(BaseModel):
    id: UUID
    employee_id: UUID
    week_start_date: date
    revenue_amount: int
    spillover_amount: int = 0
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class DailyRevenueOut(BaseModel):
    id: UUID
    employee_id: UUID
    date: date
    revenue_amount: int
    notes: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
