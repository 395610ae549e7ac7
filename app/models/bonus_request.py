import uuid
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.sql import func
from app.db import Base


class BonusRequest(Base):
    __tablename__ = "bonus_requests"
    __table_args__ = (
        UniqueConstraint("employee_id", "year", "month", name="uq_bonus_requests_employee_period"),
    )

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False)

    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)

    # EUR amount or points, depending on bonus_type
    bonus_value = Column(Integer, nullable=False)
    bonus_type = Column(String(10), nullable=False)  # EUR / POINTS

    status = Column(String(20), nullable=False, default="pending")

    notes = Column(String(1000))
    approved_at = Column(TIMESTAMP, nullable=True)
    approved_by = Column(String(100), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
