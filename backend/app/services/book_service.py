"""Book service — listing books and editing their details.

A book's owner is fixed at creation. Ownership changes only when a trade is
accepted, so update_book has no way to reassign it.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.database import unit_of_work
from app.errors import NotFoundError, UnauthorizedError
from app.models.book import Book
from app.models.user import User

logger = logging.getLogger(__name__)


def create_book(
    db: Session,
    user_id: str,
    title: str,
    author_name: Optional[str] = None,
    subtitle: Optional[str] = None,
    description: Optional[str] = None,
    publication_year: Optional[int] = None,
) -> Book:
    """List a new book owned by user_id."""
    with unit_of_work(db):
        if db.query(User.id).filter(User.id == user_id).first() is None:
            raise NotFoundError("User not found")

        book = Book(
            user_id=user_id,
            title=title,
            author_name=author_name,
            subtitle=subtitle,
            description=description,
            publication_year=publication_year,
            is_active=True,
        )
        db.add(book)
        db.flush()

    logger.info(f"Book {book.book_id} listed by {user_id}")
    return book


def get_book(db: Session, book_id: int) -> Book:
    book = db.query(Book).filter(Book.book_id == book_id).first()
    if not book:
        raise NotFoundError("Book not found")
    return book


def update_book(
    db: Session,
    acting_user_id: str,
    book_id: int,
    title: Optional[str] = None,
    author_name: Optional[str] = None,
    subtitle: Optional[str] = None,
    description: Optional[str] = None,
    publication_year: Optional[int] = None,
) -> Book:
    """Edit a book's details as its current owner.

    Fields left as None keep their current value.
    """
    with unit_of_work(db):
        book = get_book(db, book_id)
        if book.user_id != acting_user_id:
            logger.warning(f"User {acting_user_id} refused edit of book {book_id}")
            raise UnauthorizedError("Only the owner may update this book")

        if title is not None:
            book.title = title
        if author_name is not None:
            book.author_name = author_name
        if subtitle is not None:
            book.subtitle = subtitle
        if description is not None:
            book.description = description
        if publication_year is not None:
            book.publication_year = publication_year

    return book


def list_user_books(db: Session, user_id: str) -> list[Book]:
    """Active books currently owned by the user."""
    return (
        db.query(Book)
        .filter(Book.user_id == user_id, Book.is_active.is_(True))
        .order_by(Book.book_id)
        .all()
    )
