"""Books router — list a book and edit its details."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.book import BookCreateRequest, BookUpdateRequest, BookResponse
from app.services import book_service

router = APIRouter(prefix="/api/books", tags=["books"])


@router.post("", response_model=BookResponse, status_code=201)
def create_book(req: BookCreateRequest, db: Session = Depends(get_db)):
    """List a book for exchange."""
    book = book_service.create_book(
        db,
        req.user_id,
        req.title,
        author_name=req.author_name,
        subtitle=req.subtitle,
        description=req.description,
        publication_year=req.publication_year,
    )
    return BookResponse.model_validate(book)


@router.get("/{book_id}", response_model=BookResponse)
def get_book(book_id: int, db: Session = Depends(get_db)):
    return BookResponse.model_validate(book_service.get_book(db, book_id))


@router.put("/{book_id}", response_model=BookResponse)
def update_book(book_id: int, req: BookUpdateRequest, db: Session = Depends(get_db)):
    """Edit a book's details as its owner."""
    book = book_service.update_book(
        db,
        req.acting_user_id,
        book_id,
        title=req.title,
        author_name=req.author_name,
        subtitle=req.subtitle,
        description=req.description,
        publication_year=req.publication_year,
    )
    return BookResponse.model_validate(book)
