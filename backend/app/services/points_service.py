"""Points service — computes and records loyalty point awards.

awarded = round(base_points * multiplier), rounded half away from zero on the
decimal product. Every award updates the user's balance and appends a history
entry carrying both factors, so the awarded amount is reproducible from the row.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from sqlalchemy.orm import Session

from app.database import unit_of_work
from app.errors import NotFoundError
from app.models.points_history import PointsHistory
from app.services import ledger_store

logger = logging.getLogger(__name__)

MULTIPLIER_PLACES = Decimal("0.001")


@dataclass(frozen=True)
class PointsAward:
    user_id: str
    base_points: int
    multiplier: Decimal


def _as_decimal(value: Union[Decimal, float, int, str]) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 1.15 as 1.15 rather than its binary float expansion
    return Decimal(str(value))


def compute_awarded(base_points: int, multiplier: Union[Decimal, float, int, str]) -> int:
    """Scale base points by a multiplier, rounding half away from zero."""
    product = Decimal(base_points) * _as_decimal(multiplier)
    # ROUND_HALF_UP in the decimal module rounds ties away from zero
    return int(product.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def apply_award(
    db: Session,
    user_id: str,
    base_points: int,
    multiplier: Union[Decimal, float, int, str],
    action_type: str,
    related_id: Optional[int] = None,
) -> PointsHistory:
    """Credit one award inside the caller's transaction. Does not commit."""
    # Stored as Numeric(6, 3); award from the stored factor so the row reproduces it
    multiplier = _as_decimal(multiplier).quantize(MULTIPLIER_PLACES, rounding=ROUND_HALF_UP)
    awarded = compute_awarded(base_points, multiplier)

    if ledger_store.increment_balance(db, user_id, awarded) == 0:
        raise NotFoundError(f"User {user_id} not found")
    entry = ledger_store.append_points_history(
        db, user_id, awarded, base_points, multiplier, action_type, related_id
    )
    logger.info(
        f"Awarded {awarded} points to {user_id} "
        f"(base={base_points}, multiplier={multiplier}, action={action_type})"
    )
    return entry


def record_awards(
    db: Session,
    awards: list[PointsAward],
    action_type: str,
    related_id: Optional[int] = None,
) -> list[PointsHistory]:
    """Apply several awards inside the caller's transaction. Does not commit."""
    return [
        apply_award(db, a.user_id, a.base_points, a.multiplier, action_type, related_id)
        for a in awards
    ]


def award_points(
    db: Session,
    user_id: str,
    base_points: int,
    multiplier: Union[Decimal, float, int, str],
    action_type: str,
    related_id: Optional[int] = None,
) -> PointsHistory:
    """Award points to a single user in its own transaction."""
    with unit_of_work(db):
        entry = apply_award(db, user_id, base_points, multiplier, action_type, related_id)
    return entry


def award_points_both(
    db: Session,
    first: PointsAward,
    second: PointsAward,
    action_type: str,
    related_id: Optional[int] = None,
) -> list[PointsHistory]:
    """Award two users atomically: both balances change or neither does."""
    with unit_of_work(db):
        entries = record_awards(db, [first, second], action_type, related_id)
    return entries


def get_balance(db: Session, user_id: str) -> dict:
    """Get a user's current points balance and lifetime total."""
    balance = ledger_store.get_points_balance(db, user_id)
    if balance is None:
        raise NotFoundError("User not found")
    points_balance, cumulative_points = balance
    return {
        "user_id": user_id,
        "points_balance": points_balance,
        "cumulative_points": cumulative_points,
    }


def get_point_history(db: Session, user_id: str) -> list[PointsHistory]:
    """Get a user's award history, newest first."""
    return ledger_store.list_points_history(db, user_id)
