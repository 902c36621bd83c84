"""Trade service — trade creation and the status state machine.

Lifecycle: Requested -> Accepted | Rejected. Both targets are terminal.
Statuses are identified by ids from the book_statuses table; transition rules are
checked against the resolved status name.

Acceptance runs as one unit of work:
1. Lock the trade, mark it Accepted and clear its liveness flag
2. Delete other Requested trades referencing either book
3. Swap book ownership
4. Resolve each participant's reputation and multiplier
5. Award base points to both participants
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.database import unit_of_work
from app.errors import InvalidOperationError, NotFoundError, UnauthorizedError
from app.services import ledger_store, points_service, reputation_service
from app.services.ledger_store import TradeHeader, REQUESTED
from app.services.points_service import PointsAward

logger = logging.getLogger(__name__)

ACCEPTED = "Accepted"
REJECTED = "Rejected"

# Closed allow-list: status name -> TradeHeader field naming the only user
# allowed to set it. Status names missing here can never be set.
ALLOWED_TRANSITIONS = {
    ACCEPTED: "owner_id",
    REJECTED: "owner_id",
}


def create_trade(
    db: Session,
    requester_id: str,
    requested_book_id: int,
    offered_book_id: Optional[int] = None,
    note: Optional[str] = None,
) -> int:
    """Create a trade request in "Requested" status and return its id.

    The owner is derived from the requested book, never supplied by the caller.
    """
    with unit_of_work(db):
        owner_id = ledger_store.get_book_owner(db, requested_book_id)
        if owner_id is None:
            raise NotFoundError("Requested book not found")
        if owner_id == requester_id:
            raise InvalidOperationError("You cannot request your own book")

        if offered_book_id is not None:
            offered_owner = ledger_store.get_book_owner(db, offered_book_id)
            if offered_owner is None or offered_owner != requester_id:
                raise InvalidOperationError("Offered book does not belong to the requester")

        requested_status_id = ledger_store.resolve_status_id(db, REQUESTED)
        if requested_status_id is None:
            raise InvalidOperationError(f"Status '{REQUESTED}' missing in status table")

        trade_id = ledger_store.create_trade(
            db, requester_id, owner_id, requested_book_id, offered_book_id, note, requested_status_id
        )

    logger.info(
        f"Trade {trade_id} created: {requester_id} requests book {requested_book_id} "
        f"from {owner_id} (offered={offered_book_id})"
    )
    return trade_id


def _authorize(acting_user_id: str, header: TradeHeader, status_name: str) -> None:
    party_field = ALLOWED_TRANSITIONS.get(status_name)
    if party_field is None or getattr(header, party_field) != acting_user_id:
        logger.warning(f"User {acting_user_id} refused transition to '{status_name}'")
        raise UnauthorizedError("User not allowed to change to this status")


def change_status(db: Session, acting_user_id: str, trade_id: int, status_id: int) -> int:
    """Move a trade to a new status and return the number of trades updated.

    Returns 0 without side effects when the trade already has that status, or
    when a concurrent acceptance finalized it first.
    """
    with unit_of_work(db):
        header = ledger_store.get_trade_header(db, trade_id)
        if header is None:
            raise NotFoundError("Trade not found")

        status_name = ledger_store.resolve_status_name(db, status_id)
        if status_name is None:
            raise InvalidOperationError("Invalid status id")

        if header.status_id == status_id:
            return 0

        _authorize(acting_user_id, header, status_name)

        requested_status_id = ledger_store.resolve_status_id(db, REQUESTED)
        if requested_status_id is None:
            raise InvalidOperationError(f"Status '{REQUESTED}' missing in status table")
        if header.status_id != requested_status_id:
            raise InvalidOperationError("Trade is already finalized")

        if status_name == ACCEPTED:
            return _accept(db, trade_id, header, status_id)

        updated = ledger_store.update_trade_status(
            db, trade_id, status_id, expected_status_id=requested_status_id
        )

    if updated:
        logger.info(f"Trade {trade_id} set to '{status_name}' by {acting_user_id}")
    return updated


def _accept(db: Session, trade_id: int, header: TradeHeader, accepted_status_id: int) -> int:
    """Finalize an accepted trade. Must run inside the caller's unit of work."""
    updated = ledger_store.accept_and_prune(db, trade_id, accepted_status_id)
    if updated == 0:
        logger.info(f"Trade {trade_id} was finalized concurrently; skipping side effects")
        return 0

    ledger_store.swap_ownership(db, trade_id)

    awards = []
    for user_id in (header.requester_id, header.owner_id):
        reputation = reputation_service.get_reputation(db, user_id)
        multiplier = reputation_service.resolve_multiplier(db, reputation)
        awards.append(PointsAward(user_id, settings.EXCHANGE_BASE_POINTS, multiplier))

    points_service.record_awards(db, awards, settings.EXCHANGE_ACTION_TYPE, related_id=trade_id)
    return updated


def get_trade_inbox(db: Session, owner_id: str) -> list[dict]:
    """Active trades where the user owns the requested book, newest first."""
    return ledger_store.list_trades_for_owner(db, owner_id)


def get_trade_outbox(db: Session, requester_id: str) -> list[dict]:
    """Active trades the user has requested, newest first."""
    return ledger_store.list_trades_for_requester(db, requester_id)


def list_statuses(db: Session) -> list[dict]:
    """The configured status table, for callers that need status ids."""
    return [
        {"status_id": s.status_id, "status_name": s.status_name}
        for s in ledger_store.list_statuses(db)
    ]
