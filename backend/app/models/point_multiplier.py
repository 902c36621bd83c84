"""Reputation tier table mapping a reputation range to a points multiplier."""

from sqlalchemy import Column, Integer, Float, Numeric

from app.database import Base


class PointMultiplierTier(Base):
    __tablename__ = "point_multiplier_tiers"

    tier_id = Column(Integer, primary_key=True, autoincrement=True)
    # Inclusive on both ends; a boundary shared by two tiers resolves upward
    min_reputation = Column(Float, nullable=False)
    max_reputation = Column(Float, nullable=False)
    multiplier = Column(Numeric(6, 3), nullable=False)
