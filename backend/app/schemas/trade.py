"""Trade request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class TradeCreateRequest(BaseModel):
    requester_user_id: str
    requested_book_id: int
    offered_book_id: Optional[int] = None
    note: Optional[str] = None


class TradeCreateResponse(BaseModel):
    trade_id: int


class TradeStatusRequest(BaseModel):
    acting_user_id: str
    status_id: int


class TradeStatusResponse(BaseModel):
    updated: int


class TradeRecordResponse(BaseModel):
    trade_id: int
    status_name: str
    requester_user_id: str
    owner_user_id: str
    requested_book_id: int
    requested_title: str
    offered_book_id: Optional[int]
    offered_title: Optional[str]
    note: Optional[str]
    created_at: datetime
    updated_at: datetime


class StatusResponse(BaseModel):
    status_id: int
    status_name: str
