"""Points router — balance and award history."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.points import PointsBalanceResponse, PointsHistoryResponse
from app.services import points_service

router = APIRouter(prefix="/api/points", tags=["points"])


@router.get("/{user_id}/balance", response_model=PointsBalanceResponse)
def points_balance(user_id: str, db: Session = Depends(get_db)):
    return PointsBalanceResponse(**points_service.get_balance(db, user_id))


@router.get("/{user_id}/history", response_model=list[PointsHistoryResponse])
def points_history(user_id: str, db: Session = Depends(get_db)):
    """Every award the user has received, newest first."""
    entries = points_service.get_point_history(db, user_id)
    return [PointsHistoryResponse.model_validate(e) for e in entries]
