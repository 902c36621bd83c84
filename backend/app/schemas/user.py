"""User request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class UserCreateRequest(BaseModel):
    email: str
    display_name: str
    location: Optional[str] = None


class UserUpdateRequest(BaseModel):
    display_name: Optional[str] = None
    location: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: str
    display_name: str
    location: Optional[str]
    points_balance: int
    cumulative_points: int
    created_at: datetime

    class Config:
        from_attributes = True
