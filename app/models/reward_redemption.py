import uuid
from sqlalchemy import Column, String, Integer, TIMESTAMP, ForeignKey, Uuid
from sqlalchemy.sql import func
from app.db import Base


class RewardRedemption(Base):
    __tablename__ = "reward_redemptions"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)

    employee_id = Column(Uuid(as_uuid=True), ForeignKey("employees.id"), nullable=False, index=True)
    reward_id = Column(Uuid(as_uuid=True), ForeignKey("rewards_catalog.id"), nullable=True)

    reward_name = Column(String(100), nullable=False)
    points_cost = Column(Integer, nullable=False)

    status = Column(String(20), nullable=False, default="pending")
    # pending | approved | rejected | cancelled

    # bumped on every employee-side mutation
    version = Column(Integer, nullable=False, default=1)

    notes = Column(String(1000))
    manager_comment = Column(String(1000))
    delivered_code = Column(String(255))

    approved_at = Column(TIMESTAMP, nullable=True)
    approved_by = Column(String(100), nullable=True)
    decided_at = Column(TIMESTAMP, nullable=True)

    created_at = Column(TIMESTAMP, server_default=func.now())
