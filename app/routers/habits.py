"""
Habits router — owner-scoped CRUD.

POST   /habits
GET    /habits
GET    /habits/{habit_id}
PUT    /habits/{habit_id}
DELETE /habits/{habit_id}
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.core.deps import get_current_user
from app.db.base import get_db
from app.models.habit import Habit
from app.models.user import User
from app.schemas.common import ErrorResponse
from app.schemas.habit import (
    HabitCreate,
    HabitListResponse,
    HabitResponse,
    HabitUpdate,
    Pagination,
)
from app.services.habits import (
    create_habit,
    delete_habit,
    get_owned_habit,
    list_habits,
    total_pages,
    update_habit,
)

router = APIRouter(prefix="/habits", tags=["habits"])

_NOT_FOUND = {404: {"model": ErrorResponse, "description": "Habit not found."}}


# ---------------------------------------------------------------------------
# Serialization helper
# ---------------------------------------------------------------------------

def habit_to_response(h: Habit) -> HabitResponse:
    return HabitResponse(
        id=h.id,
        title=h.title,
        description=h.description,
        frequency=h.frequency,
        tags=h.tags,
        reminder_time=h.reminder_time,
        created_at=h.created_at.isoformat() if h.created_at else "",
        updated_at=h.updated_at.isoformat() if h.updated_at else "",
    )


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------

@router.post(
    "",
    response_model=HabitResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a habit",
)
def create(
    payload: HabitCreate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return habit_to_response(create_habit(db=db, owner=user, payload=payload))


@router.get(
    "",
    response_model=HabitListResponse,
    summary="List the caller's habits (newest first)",
)
def list_all(
    tag: Optional[str] = Query(default=None, description="Only habits carrying this tag."),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100, description="Page size."),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    total, items = list_habits(db=db, owner=user, tag=tag, page=page, limit=limit)
    return HabitListResponse(
        items=[habit_to_response(h) for h in items],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages(total, limit),
        ),
    )


@router.get(
    "/{habit_id}",
    response_model=HabitResponse,
    summary="Get one habit",
    responses=_NOT_FOUND,
)
def get(
    habit_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    return habit_to_response(get_owned_habit(db=db, owner=user, habit_id=habit_id))


@router.put(
    "/{habit_id}",
    response_model=HabitResponse,
    summary="Update a habit (partial)",
    responses=_NOT_FOUND,
)
def update(
    habit_id: int,
    payload: HabitUpdate,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Only fields present in the body change; omitted fields keep their value."""
    return habit_to_response(
        update_habit(db=db, owner=user, habit_id=habit_id, payload=payload)
    )


@router.delete(
    "/{habit_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a habit and its completion log",
    responses=_NOT_FOUND,
)
def delete(
    habit_id: int,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    delete_habit(db=db, owner=user, habit_id=habit_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
