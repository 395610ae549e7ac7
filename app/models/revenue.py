import uuid
from sqlalchemy import Column, Integer, String, Date, TIMESTAMP, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func
from app.db import Base


class WeeklyRevenue(Base):
    __tablename__ = "weekly_revenue"
    __table_args__ = (
        UniqueConstraint("employee_id", "week_start_date", name="uq_weekly_revenue_employee_week"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False)

    # always a Monday
    week_start_date = Column(Date, nullable=False)
    revenue_amount = Column(Integer, nullable=False, default=0)
    # part of revenue_amount booked on days of the following month
    spillover_amount = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())


class DailyRevenue(Base):
    __tablename__ = "daily_revenue"
    __table_args__ = (
        UniqueConstraint("employee_id", "date", name="uq_daily_revenue_employee_date"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False)

    date = Column(Date, nullable=False)
    revenue_amount = Column(Integer, nullable=False, default=0)
    notes = Column(String(1000))

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())


class MonthlyRevenueSummary(Base):
    __tablename__ = "monthly_revenue_summary"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", "month", name="uq_monthly_revenue_employee_period"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False)

    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)

    total_revenues = Column(Integer, nullable=False, default=0)
    weeks_count = Column(Integer, nullable=False, default=0)
    days_count = Column(Integer, nullable=False, default=0)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
