import uuid
from sqlalchemy import Column, String, Integer, Boolean, Date, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class Employee(Base):
    __tablename__ = "employees"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    username = Column(String(100), nullable=False, unique=True)
    full_name = Column(String(200), nullable=False)
    password_hash = Column(String(255), nullable=False)

    email = Column(String(255))
    phone = Column(String(50))
    position = Column(String(100))
    department = Column(String(100))
    hire_date = Column(Date)

    is_active = Column(Boolean, nullable=False, default=True)

    store_id = Column(Uuid(as_uuid=True), ForeignKey("stores.id"), nullable=True)

    # projection of employee_events.points, only written by points_service
    points_balance = Column(Integer, nullable=False, default=0)
    total_earned_points = Column(Integer, nullable=False, default=0)

    # cents
    monthly_revenue_target = Column(Integer, nullable=False, default=0)
    monthly_revenue_actual = Column(Integer, nullable=False, default=0)
    manual_revenue_override = Column(Boolean, nullable=False, default=False)

    bonus_revenue_value = Column(Integer, nullable=True)
    bonus_revenue_type = Column(String(10), nullable=True)  # EUR / POINTS

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
