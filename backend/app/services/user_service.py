"""User service — registration and profile details.

Points balances and the rating signal are not editable here; balances move only
through the points service.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.database import unit_of_work
from app.errors import ConflictError, NotFoundError
from app.models.user import User

logger = logging.getLogger(__name__)


def create_user(
    db: Session,
    email: str,
    display_name: str,
    location: Optional[str] = None,
) -> User:
    """Register a user with a zero balance and no ratings."""
    email = email.strip().lower()
    with unit_of_work(db):
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            raise ConflictError("Email already registered")

        user = User(email=email, display_name=display_name, location=location)
        db.add(user)
        db.flush()

    logger.info(f"User {user.id} registered")
    return user


def get_user(db: Session, user_id: str) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def update_user(
    db: Session,
    user_id: str,
    display_name: Optional[str] = None,
    location: Optional[str] = None,
) -> User:
    """Update profile details. Fields left as None keep their current value."""
    with unit_of_work(db):
        user = get_user(db, user_id)
        if display_name is not None:
            user.display_name = display_name
        if location is not None:
            user.location = location
    return user
