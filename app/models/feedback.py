import uuid
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class EmployeeFeedback(Base):
    __tablename__ = "employee_feedback"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # recipient
    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True)
    from_employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=True)

    feedback_type = Column(String(20), nullable=False, default="kudos")  # kudos / feedback

    title = Column(String(200), nullable=False)
    message = Column(String(2000), nullable=False)
    category = Column(String(50))
    rating = Column(Integer)

    status = Column(String(20), nullable=True)
    # pending | approved | rejected (kudos only)

    approved_at = Column(TIMESTAMP, nullable=True)
    approved_by = Column(String(100), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
