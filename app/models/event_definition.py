import uuid
from sqlalchemy import Column, String, Integer, Boolean, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from app.db import Base


class EventDefinition(Base):
    __tablename__ = "events_settings"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(200), nullable=False)

    # absolute value, the sign comes from event_type
    points = Column(Integer, nullable=False)
    event_type = Column(String(20), nullable=False)  # positive / negative

    is_enabled = Column(Boolean, nullable=False, default=True)
    sort_order = Column(Integer, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
