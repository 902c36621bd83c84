"""Trade request model — one proposed exchange of a book, optionally for another."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, String, Integer, DateTime, ForeignKey, Text
from sqlalchemy.orm import relationship

from app.database import Base


class TradeRequest(Base):
    __tablename__ = "trade_requests"

    trade_id = Column(Integer, primary_key=True, autoincrement=True)
    requester_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    # Derived from the requested book at creation time, never supplied by the caller
    owner_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    requested_book_id = Column(Integer, ForeignKey("books.book_id"), nullable=False, index=True)
    offered_book_id = Column(Integer, ForeignKey("books.book_id"), nullable=True, index=True)
    status_id = Column(Integer, ForeignKey("book_statuses.status_id"), nullable=False)
    note = Column(Text, nullable=True)
    # Cleared when the trade is finalized by acceptance
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    status = relationship("BookStatus")
    requested_book = relationship("Book", foreign_keys=[requested_book_id])
    offered_book = relationship("Book", foreign_keys=[offered_book_id])
