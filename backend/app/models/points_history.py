"""Points history model — immutable audit record of every award."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from app.database import Base


class PointsHistory(Base):
    __tablename__ = "points_history"

    history_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    points = Column(Integer, nullable=False)  # awarded = round(base_points * multiplier)
    base_points = Column(Integer, nullable=False)
    multiplier = Column(Numeric(6, 3), nullable=False)
    action_type = Column(String(50), nullable=False)  # exchange_completed | ...
    related_id = Column(Integer, nullable=True)  # e.g. trade_id
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    user = relationship("User", back_populates="points_history")
