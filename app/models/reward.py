import uuid
from sqlalchemy import Column, String, Integer, Boolean, TIMESTAMP, Uuid
from sqlalchemy.sql import func
from app.db import Base


class Reward(Base):
    __tablename__ = "rewards_catalog"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    name = Column(String(100), nullable=False)
    description = Column(String(255))
    category = Column(String(50), nullable=False, default="general")

    # cash / dayoff / other
    type = Column(String(50), nullable=True, default="other")
    icon = Column(String(50), nullable=True)

    points_cost = Column(Integer, nullable=False)

    # NULL = unlimited
    stock = Column(Integer, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())
