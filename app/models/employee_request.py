import uuid
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class EmployeeRequest(Base):
    __tablename__ = "employee_requests"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True)

    request_type = Column(String(20), nullable=False)  # positive / negative
    event_type = Column(String(200), nullable=False)
    description = Column(String(1000))

    points = Column(Integer, nullable=False)
    # cents, sales only
    amount = Column(Integer, nullable=True)

    status = Column(String(20), nullable=False, default="pending")
    # pending | approved | rejected

    notes = Column(String(1000))
    approved_at = Column(TIMESTAMP, nullable=True)
    approved_by = Column(String(100), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
