"""Ledger store — persistence primitives for books, trades and points.

Nothing here commits. Callers compose these calls inside a single
app.database.unit_of_work() so that a trade acceptance, its pruning, the
ownership swap and both points awards land in one transaction.
"""

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import NamedTuple, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, aliased

from app.errors import InvalidOperationError, NotFoundError
from app.models.book import Book
from app.models.book_status import BookStatus
from app.models.point_multiplier import PointMultiplierTier
from app.models.points_history import PointsHistory
from app.models.trade_request import TradeRequest
from app.models.user import User

logger = logging.getLogger(__name__)

REQUESTED = "Requested"


class TradeHeader(NamedTuple):
    requester_id: str
    owner_id: str
    status_id: int


# ── Books & statuses ─────────────────────────────────────────────────────────

def get_book_owner(db: Session, book_id: int) -> Optional[str]:
    """Return the owning user id of a book, or None if the book does not exist."""
    row = db.query(Book.user_id).filter(Book.book_id == book_id).first()
    return row.user_id if row else None


def resolve_status_id(db: Session, name: str) -> Optional[int]:
    row = db.query(BookStatus.status_id).filter(BookStatus.status_name == name).first()
    return row.status_id if row else None


def resolve_status_name(db: Session, status_id: int) -> Optional[str]:
    row = db.query(BookStatus.status_name).filter(BookStatus.status_id == status_id).first()
    return row.status_name if row else None


def list_statuses(db: Session) -> list[BookStatus]:
    return db.query(BookStatus).order_by(BookStatus.status_id).all()


# ── Trades ───────────────────────────────────────────────────────────────────

def get_trade_header(db: Session, trade_id: int) -> Optional[TradeHeader]:
    """Non-locking read of the fields needed for authorization checks."""
    row = (
        db.query(TradeRequest.requester_user_id, TradeRequest.owner_user_id, TradeRequest.status_id)
        .filter(TradeRequest.trade_id == trade_id)
        .first()
    )
    if row is None:
        return None
    return TradeHeader(row.requester_user_id, row.owner_user_id, row.status_id)


def lock_trade(db: Session, trade_id: int) -> Optional[TradeRequest]:
    """Read a trade row with SELECT ... FOR UPDATE."""
    return (
        db.query(TradeRequest)
        .filter(TradeRequest.trade_id == trade_id)
        .with_for_update()
        .first()
    )


def create_trade(
    db: Session,
    requester_id: str,
    owner_id: str,
    requested_book_id: int,
    offered_book_id: Optional[int],
    note: Optional[str],
    status_id: int,
) -> int:
    """Insert a trade request and return its id."""
    trade = TradeRequest(
        requester_user_id=requester_id,
        owner_user_id=owner_id,
        requested_book_id=requested_book_id,
        offered_book_id=offered_book_id,
        status_id=status_id,
        note=note,
        is_active=True,
    )
    db.add(trade)
    db.flush()
    return trade.trade_id


def update_trade_status(
    db: Session, trade_id: int, status_id: int, expected_status_id: Optional[int] = None
) -> int:
    """Set a trade's status. With expected_status_id, only update if it still holds."""
    query = db.query(TradeRequest).filter(TradeRequest.trade_id == trade_id)
    if expected_status_id is not None:
        query = query.filter(TradeRequest.status_id == expected_status_id)
    return query.update(
        {
            TradeRequest.status_id: status_id,
            TradeRequest.updated_at: datetime.now(timezone.utc),
        },
        synchronize_session=False,
    )


def accept_and_prune(db: Session, trade_id: int, accepted_status_id: int) -> int:
    """Accept a trade and delete competing requests for the same books.

    Takes the row lock on the trade first. The status update is conditional on
    the trade still being an active "Requested" trade, so a second acceptance
    racing the first affects zero rows and the caller skips all side effects.
    """
    requested_status_id = resolve_status_id(db, REQUESTED)
    if requested_status_id is None:
        raise InvalidOperationError(f"Status '{REQUESTED}' missing in status table")

    trade = lock_trade(db, trade_id)
    if trade is None:
        raise NotFoundError("Trade not found")
    book_ids = [b for b in (trade.requested_book_id, trade.offered_book_id) if b is not None]

    updated = (
        db.query(TradeRequest)
        .filter(
            TradeRequest.trade_id == trade_id,
            TradeRequest.status_id == requested_status_id,
            TradeRequest.is_active.is_(True),
        )
        .update(
            {
                TradeRequest.status_id: accepted_status_id,
                TradeRequest.is_active: False,
                TradeRequest.updated_at: datetime.now(timezone.utc),
            },
            synchronize_session=False,
        )
    )
    if updated == 0:
        return 0

    pruned = (
        db.query(TradeRequest)
        .filter(
            TradeRequest.trade_id != trade_id,
            TradeRequest.status_id == requested_status_id,
            or_(
                TradeRequest.requested_book_id.in_(book_ids),
                TradeRequest.offered_book_id.in_(book_ids),
            ),
        )
        .delete(synchronize_session=False)
    )
    logger.info(f"Trade {trade_id} accepted; pruned {pruned} competing request(s)")
    return updated


def swap_ownership(db: Session, trade_id: int) -> int:
    """Give the requested book to the requester and the offered book to the owner.

    Returns 1 or 2 depending on whether an offered book exists.
    """
    trade = lock_trade(db, trade_id)
    if trade is None:
        raise NotFoundError("Trade not found")

    total = _transfer_book(db, trade.requested_book_id, trade.requester_user_id)
    if trade.offered_book_id is not None:
        total += _transfer_book(db, trade.offered_book_id, trade.owner_user_id)
    return total


def _transfer_book(db: Session, book_id: int, new_owner_id: str) -> int:
    return (
        db.query(Book)
        .filter(Book.book_id == book_id)
        .update(
            {Book.user_id: new_owner_id, Book.updated_at: datetime.now(timezone.utc)},
            synchronize_session=False,
        )
    )


def _list_trades(db: Session, *criteria) -> list[dict]:
    requested = aliased(Book)
    offered = aliased(Book)
    rows = (
        db.query(
            TradeRequest,
            BookStatus.status_name,
            requested.title.label("requested_title"),
            offered.title.label("offered_title"),
        )
        .join(BookStatus, BookStatus.status_id == TradeRequest.status_id)
        .join(requested, requested.book_id == TradeRequest.requested_book_id)
        .outerjoin(offered, offered.book_id == TradeRequest.offered_book_id)
        .filter(TradeRequest.is_active.is_(True), *criteria)
        .order_by(TradeRequest.created_at.desc(), TradeRequest.trade_id.desc())
        .all()
    )
    return [
        {
            "trade_id": t.trade_id,
            "status_name": status_name,
            "requester_user_id": t.requester_user_id,
            "owner_user_id": t.owner_user_id,
            "requested_book_id": t.requested_book_id,
            "requested_title": requested_title,
            "offered_book_id": t.offered_book_id,
            "offered_title": offered_title,
            "note": t.note,
            "created_at": t.created_at,
            "updated_at": t.updated_at,
        }
        for t, status_name, requested_title, offered_title in rows
    ]


def list_trades_for_owner(db: Session, owner_id: str) -> list[dict]:
    return _list_trades(db, TradeRequest.owner_user_id == owner_id)


def list_trades_for_requester(db: Session, requester_id: str) -> list[dict]:
    return _list_trades(db, TradeRequest.requester_user_id == requester_id)


# ── Reputation & points ──────────────────────────────────────────────────────

def get_reputation_signal(db: Session, user_id: str) -> tuple[int, int]:
    """Return (rating sum, rating count); an unknown user reads as (0, 0)."""
    row = (
        db.query(User.reputation_sum, User.reputation_count)
        .filter(User.id == user_id)
        .first()
    )
    if row is None:
        return 0, 0
    return row.reputation_sum or 0, row.reputation_count or 0


def resolve_multiplier_tier(db: Session, reputation: float) -> Optional[Decimal]:
    """Multiplier of the tier whose [min, max] range contains reputation.

    Where ranges meet or overlap, the tier with the highest minimum wins, so a
    shared boundary resolves to the upper tier.
    """
    row = (
        db.query(PointMultiplierTier.multiplier)
        .filter(
            PointMultiplierTier.min_reputation <= reputation,
            PointMultiplierTier.max_reputation >= reputation,
        )
        .order_by(PointMultiplierTier.min_reputation.desc())
        .first()
    )
    return row.multiplier if row else None


def increment_balance(db: Session, user_id: str, amount: int) -> int:
    return (
        db.query(User)
        .filter(User.id == user_id)
        .update(
            {
                User.points_balance: User.points_balance + amount,
                User.cumulative_points: User.cumulative_points + amount,
            },
            synchronize_session=False,
        )
    )


def append_points_history(
    db: Session,
    user_id: str,
    points: int,
    base_points: int,
    multiplier: Decimal,
    action_type: str,
    related_id: Optional[int],
) -> PointsHistory:
    entry = PointsHistory(
        user_id=user_id,
        points=points,
        base_points=base_points,
        multiplier=multiplier,
        action_type=action_type,
        related_id=related_id,
    )
    db.add(entry)
    db.flush()
    return entry


def get_points_balance(db: Session, user_id: str) -> Optional[tuple[int, int]]:
    row = (
        db.query(User.points_balance, User.cumulative_points)
        .filter(User.id == user_id)
        .first()
    )
    if row is None:
        return None
    return row.points_balance, row.cumulative_points


def list_points_history(db: Session, user_id: str) -> list[PointsHistory]:
    return (
        db.query(PointsHistory)
        .filter(PointsHistory.user_id == user_id)
        .order_by(PointsHistory.created_at.desc(), PointsHistory.history_id.desc())
        .all()
    )
