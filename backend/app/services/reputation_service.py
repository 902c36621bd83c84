"""Reputation service — rating signal to reputation, reputation to multiplier."""

from decimal import Decimal

from sqlalchemy.orm import Session

from app.services import ledger_store

NEUTRAL_REPUTATION = 0.0
NEUTRAL_MULTIPLIER = Decimal("1.0")


def get_reputation(db: Session, user_id: str) -> float:
    """Average rating received by a user, 0.0 when they have no ratings yet."""
    rating_sum, rating_count = ledger_store.get_reputation_signal(db, user_id)
    if rating_count == 0:
        return NEUTRAL_REPUTATION
    return rating_sum / rating_count


def resolve_multiplier(db: Session, reputation: float) -> Decimal:
    """Points multiplier for a reputation value.

    Gaps in the tier table fall back to the neutral multiplier so that an
    award is never blocked by tier configuration.
    """
    multiplier = ledger_store.resolve_multiplier_tier(db, reputation)
    if multiplier is None:
        return NEUTRAL_MULTIPLIER
    return Decimal(str(multiplier))
