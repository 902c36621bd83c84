"""Reference data seeding for the status table and multiplier tiers."""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from app.database import unit_of_work
from app.models.book_status import BookStatus
from app.models.point_multiplier import PointMultiplierTier

logger = logging.getLogger(__name__)

DEFAULT_STATUSES = ["Requested", "Accepted", "Rejected"]

# (min_reputation, max_reputation, multiplier); ratings run from 1 to 5 and a
# user without ratings has reputation 0.0. Adjacent tiers share their boundary.
DEFAULT_TIERS = [
    (0.0, 3.0, Decimal("1.00")),
    (3.0, 4.0, Decimal("1.10")),
    (4.0, 4.5, Decimal("1.25")),
    (4.5, 5.0, Decimal("1.50")),
]


def seed_reference_data(db: Session) -> None:
    """Insert default statuses and tiers into empty tables. Safe to call repeatedly."""
    with unit_of_work(db):
        if db.query(BookStatus).count() == 0:
            for name in DEFAULT_STATUSES:
                db.add(BookStatus(status_name=name))
            logger.info(f"Seeded {len(DEFAULT_STATUSES)} trade statuses")

        if db.query(PointMultiplierTier).count() == 0:
            for low, high, multiplier in DEFAULT_TIERS:
                db.add(PointMultiplierTier(min_reputation=low, max_reputation=high, multiplier=multiplier))
            logger.info(f"Seeded {len(DEFAULT_TIERS)} multiplier tiers")
