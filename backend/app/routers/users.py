"""Users router — registration, profile details and owned books."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.book import BookResponse
from app.schemas.user import UserCreateRequest, UserUpdateRequest, UserResponse
from app.services import book_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
def register(req: UserCreateRequest, db: Session = Depends(get_db)):
    """Register a new user."""
    user = user_service.create_user(db, req.email, req.display_name, req.location)
    return UserResponse.model_validate(user)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: str, db: Session = Depends(get_db)):
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
def update_user(user_id: str, req: UserUpdateRequest, db: Session = Depends(get_db)):
    user = user_service.update_user(db, user_id, req.display_name, req.location)
    return UserResponse.model_validate(user)


@router.get("/{user_id}/books", response_model=list[BookResponse])
def user_books(user_id: str, db: Session = Depends(get_db)):
    """Books the user currently owns."""
    return [BookResponse.model_validate(b) for b in book_service.list_user_books(db, user_id)]
