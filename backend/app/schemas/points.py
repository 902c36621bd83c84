"""Points request/response schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PointsHistoryResponse(BaseModel):
    history_id: int
    user_id: str
    points: int
    base_points: int
    multiplier: Decimal
    action_type: str
    related_id: Optional[int]
    created_at: datetime

    class Config:
        from_attributes = True


class PointsBalanceResponse(BaseModel):
    user_id: str
    points_balance: int
    cumulative_points: int
