"""Trades router — create, change status, inbox/outbox and status lookup."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import NotUpdatedError
from app.middleware.rate_limit import limiter
from app.schemas.trade import (
    TradeCreateRequest,
    TradeCreateResponse,
    TradeStatusRequest,
    TradeStatusResponse,
    TradeRecordResponse,
    StatusResponse,
)
from app.services import trade_service

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.post("", response_model=TradeCreateResponse, status_code=201)
@limiter.limit(settings.TRADE_CREATE_RATE_LIMIT)
def create_trade(
    request: Request,
    req: TradeCreateRequest,
    db: Session = Depends(get_db),
):
    """Propose a trade for another user's book."""
    trade_id = trade_service.create_trade(
        db, req.requester_user_id, req.requested_book_id, req.offered_book_id, req.note
    )
    return TradeCreateResponse(trade_id=trade_id)


@router.post("/{trade_id}/status", response_model=TradeStatusResponse)
def change_status(
    trade_id: int,
    req: TradeStatusRequest,
    db: Session = Depends(get_db),
):
    """Accept or reject a trade as its owner."""
    rows = trade_service.change_status(db, req.acting_user_id, trade_id, req.status_id)
    if rows == 0:
        raise NotUpdatedError("Trade not updated")
    return TradeStatusResponse(updated=rows)


@router.get("/statuses", response_model=list[StatusResponse])
def list_statuses(db: Session = Depends(get_db)):
    return [StatusResponse(**s) for s in trade_service.list_statuses(db)]


@router.get("/inbox/{user_id}", response_model=list[TradeRecordResponse])
def trade_inbox(user_id: str, db: Session = Depends(get_db)):
    """Pending and rejected trades on books the user owns."""
    return [TradeRecordResponse(**t) for t in trade_service.get_trade_inbox(db, user_id)]


@router.get("/outbox/{user_id}", response_model=list[TradeRecordResponse])
def trade_outbox(user_id: str, db: Session = Depends(get_db)):
    """Pending and rejected trades the user has requested."""
    return [TradeRecordResponse(**t) for t in trade_service.get_trade_outbox(db, user_id)]
