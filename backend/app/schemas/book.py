"""Book request/response schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class BookCreateRequest(BaseModel):
    user_id: str
    title: str
    author_name: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    publication_year: Optional[int] = None


class BookUpdateRequest(BaseModel):
    acting_user_id: str
    title: Optional[str] = None
    author_name: Optional[str] = None
    subtitle: Optional[str] = None
    description: Optional[str] = None
    publication_year: Optional[int] = None


class BookResponse(BaseModel):
    book_id: int
    user_id: str
    title: str
    author_name: Optional[str]
    subtitle: Optional[str]
    description: Optional[str]
    publication_year: Optional[int]
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
