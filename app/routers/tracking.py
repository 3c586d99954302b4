"""
Tracking router.

POST /habits/{habit_id}/track     — mark today as completed
GET  /habits/{habit_id}/history   — recent window + current streak
"""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user, get_now
from app.db.base import get_db
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.tracking import (
    DayStatusResponse,
    HabitHistoryResponse,
    HabitLogResponse,
)
from app.services.habits import get_owned_habit
from app.services.tracking import get_habit_history, track_habit

router = APIRouter(prefix="/habits", tags=["tracking"])


@router.post(
    "/{habit_id}/track",
    response_model=HabitLogResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Mark a habit as completed today",
    responses={
        201: {"description": "Completion recorded."},
        404: {"model": ErrorResponse, "description": "Habit not found."},
        409: {"model": ErrorResponse, "description": "Already tracked today."},
    },
)
def track(
    habit_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """
    Record a completion for the current calendar day (reference timezone).

    Raises **409** if the habit already has a completion for today.
    """
    habit = get_owned_habit(db=db, owner=user, habit_id=habit_id)
    log = track_habit(db=db, habit=habit, now=now)
    return HabitLogResponse(
        id=log.id,
        habit_id=log.habit_id,
        day=str(log.day),
        created_at=log.created_at.isoformat() if log.created_at else "",
    )


@router.get(
    "/{habit_id}/history",
    response_model=HabitHistoryResponse,
    summary="Recent completion window and current streak",
    responses={404: {"model": ErrorResponse, "description": "Habit not found."}},
)
def history(
    habit_id: int,
    days: Optional[int] = Query(
        default=None,
        ge=1,
        le=90,
        description="Window length in days, ending today. Defaults to 7.",
    ),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
):
    """
    Return one `{day, completed}` entry per day of the window (oldest first)
    and the streak: consecutive completed days ending today or yesterday.
    """
    habit = get_owned_habit(db=db, owner=user, habit_id=habit_id)
    result = get_habit_history(db=db, habit=habit, now=now, window_size=days)
    return HabitHistoryResponse(
        habit_id=habit.id,
        history=[
            DayStatusResponse(day=str(s.day), completed=s.completed)
            for s in result.history
        ],
        streak=result.streak,
    )
