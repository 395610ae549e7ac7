import uuid
from sqlalchemy import Column, String, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class Notification(Base):
    __tablename__ = "notifications"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True)

    title = Column(String(200), nullable=False)
    message = Column(String(2000), nullable=False)

    type = Column(String(20), nullable=False, default="info")
    # achievement | points | goal | warning | info
    priority = Column(String(20), nullable=False, default="normal")  # normal / urgent
    status = Column(String(20), nullable=False, default="sent")  # sent / read

    action_url = Column(String(500))
    created_by = Column(String(100))

    read_at = Column(TIMESTAMP, nullable=True)
    created_at = Column(TIMESTAMP, server_default=func.now())
