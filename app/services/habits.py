"""
Habit service: owner-scoped CRUD.

Every lookup filters on both id and owner, so a habit that belongs to
someone else is indistinguishable from one that does not exist.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

from sqlalchemy.orm import Session, selectinload

from app.core.errors import HabitNotFoundError
from app.models.habit import Habit, HabitTag
from app.models.user import User
from app.schemas.habit import HabitCreate, HabitUpdate

logger = logging.getLogger(__name__)


def get_owned_habit(db: Session, owner: User, habit_id: int) -> Habit:
    habit = (
        db.query(Habit)
        .filter(Habit.id == habit_id, Habit.user_id == owner.id)
        .first()
    )
    if habit is None:
        raise HabitNotFoundError(habit_id=habit_id)
    return habit


def create_habit(db: Session, owner: User, payload: HabitCreate) -> Habit:
    habit = Habit(
        user_id=owner.id,
        title=payload.title,
        description=payload.description,
        frequency=payload.frequency,
        reminder_time=payload.reminder_time,
    )
    habit.tags = payload.tags
    db.add(habit)
    db.commit()
    db.refresh(habit)
    return habit


def list_habits(
    db: Session,
    owner: User,
    tag: Optional[str] = None,
    page: int = 1,
    limit: int = 10,
) -> tuple[int, list[Habit]]:
    """Return (total, page) of the owner's habits, newest first."""
    q = db.query(Habit).filter(Habit.user_id == owner.id)
    if tag:
        q = q.filter(Habit.tag_rows.any(HabitTag.name == tag))
    total = q.count()
    items = (
        q.options(selectinload(Habit.tag_rows))
        .order_by(Habit.created_at.desc(), Habit.id.desc())
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return total, items


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0


def update_habit(db: Session, owner: User, habit_id: int, payload: HabitUpdate) -> Habit:
    habit = get_owned_habit(db, owner, habit_id)
    changes = payload.model_dump(exclude_unset=True)
    for field, value in changes.items():
        setattr(habit, field, value)
    db.commit()
    db.refresh(habit)
    return habit


def delete_habit(db: Session, owner: User, habit_id: int) -> None:
    """Delete a habit together with its completion log and tags."""
    habit = get_owned_habit(db, owner, habit_id)
    db.delete(habit)
    db.commit()
    logger.info("Deleted habit id=%s owner=%s", habit_id, owner.id)
