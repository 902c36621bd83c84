"""SQLAlchemy ORM models."""

from app.models.user import User
from app.models.book import Book
from app.models.book_status import BookStatus
from app.models.trade_request import TradeRequest
from app.models.points_history import PointsHistory
from app.models.point_multiplier import PointMultiplierTier

__all__ = [
    "User",
    "Book",
    "BookStatus",
    "TradeRequest",
    "PointsHistory",
    "PointMultiplierTier",
]
