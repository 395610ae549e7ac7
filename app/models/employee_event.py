import uuid
from sqlalchemy import Column, Integer, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class EmployeeEvent(Base):
    __tablename__ = "employee_events"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True)

    event_type = Column(String(200), nullable=False)
    event_type_id = Column(Uuid(as_uuid=True), ForeignKey("events_settings.id"), nullable=True)

    # signed
    points = Column(Integer, nullable=False)
    transaction_type = Column(String(20), nullable=False, default="EVENT")
    # EVENT / REDEMPTION / BONUS / ADJUST

    description = Column(String(1000))
    notes = Column(String(1000))
    created_by = Column(String(100))

    # request / redemption / bonus request that produced the row
    source_id = Column(Uuid(as_uuid=True), nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
