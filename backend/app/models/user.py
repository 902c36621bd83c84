"""User model — points balances and the reputation signal."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, DateTime, Integer
from sqlalchemy.orm import relationship

from app.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    # Mutated only by the points service
    points_balance = Column(Integer, nullable=False, default=0)
    cumulative_points = Column(Integer, nullable=False, default=0)
    # Aggregate of received ratings; reputation = sum / count
    reputation_sum = Column(Integer, nullable=False, default=0)
    reputation_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    books = relationship("Book", back_populates="owner")
    points_history = relationship("PointsHistory", back_populates="user")
