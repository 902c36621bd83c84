"""Shared fixtures: an in-memory SQLite ledger seeded with reference data."""

import os
import sys
import uuid

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Keep tests off any real database and away from the request rate limit
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("TRADE_CREATE_RATE_LIMIT", "1000/minute")
os.environ.setdefault("SEED_REFERENCE_DATA", "false")

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.database import Base  # noqa: E402
from app import models  # noqa: E402,F401
from app.models.book import Book  # noqa: E402
from app.models.book_status import BookStatus  # noqa: E402
from app.models.user import User  # noqa: E402
from app.seed import seed_reference_data  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    seed_reference_data(session)
    yield session
    session.close()


@pytest.fixture
def statuses(db) -> dict:
    """Status name -> status id."""
    return {s.status_name: s.status_id for s in db.query(BookStatus).all()}


@pytest.fixture
def make_user(db):
    def _make_user(name: str = "reader", reputation_sum: int = 0, reputation_count: int = 0) -> User:
        user = User(
            id=str(uuid.uuid4()),
            email=f"{name}-{uuid.uuid4().hex[:8]}@bookx.test",
            display_name=name,
            reputation_sum=reputation_sum,
            reputation_count=reputation_count,
        )
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_book(db):
    def _make_book(owner: User, title: str = "Untitled") -> Book:
        book = Book(user_id=owner.id, title=title, author_name="Anon")
        db.add(book)
        db.commit()
        return book

    return _make_book
