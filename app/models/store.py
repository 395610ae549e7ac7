import uuid
from sqlalchemy import Column, String, Integer, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from app.db import Base


class Store(Base):
    __tablename__ = "stores"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False)
    location = Column(String(255))

    # cents
    monthly_goal = Column(Integer, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
