"""
Tracking service: the completion write path and the history/streak read path.

Write: insert one HabitLog for "today" unless one exists. The unique
constraint on (habit_id, day) settles concurrent attempts.

Read: load every completion day of the habit (no lookback cap) and hand
it to the streak engine.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import HabitAlreadyTrackedError
from app.models.habit import Habit
from app.models.habit_log import HabitLog
from app.services.streak_engine import HabitHistory, evaluate, normalize_today

logger = logging.getLogger(__name__)


def _log_exists(db: Session, habit_id: int, day) -> bool:
    return (
        db.query(HabitLog.id)
        .filter(HabitLog.habit_id == habit_id, HabitLog.day == day)
        .first()
        is not None
    )


def track_habit(db: Session, habit: Habit, now: datetime) -> HabitLog:
    """Record today's completion for `habit`; raises HabitAlreadyTrackedError on repeat."""
    today = normalize_today(now, settings.tzinfo)
    if _log_exists(db, habit.id, today):
        raise HabitAlreadyTrackedError(habit_id=habit.id, day=today)

    log = HabitLog(habit_id=habit.id, day=today)
    db.add(log)
    try:
        db.commit()
    except IntegrityError:
        # Lost the race against a concurrent request for the same day
        db.rollback()
        raise HabitAlreadyTrackedError(habit_id=habit.id, day=today)
    db.refresh(log)
    logger.info("Tracked habit id=%s day=%s", habit.id, today)
    return log


def get_completion_days(db: Session, habit_id: int) -> list:
    rows = (
        db.query(HabitLog.day)
        .filter(HabitLog.habit_id == habit_id)
        .order_by(HabitLog.day.desc())
        .all()
    )
    return [row.day for row in rows]


def get_habit_history(
    db: Session,
    habit: Habit,
    now: datetime,
    window_size: Optional[int] = None,
) -> HabitHistory:
    return evaluate(
        get_completion_days(db, habit.id),
        now=now,
        window_size=window_size or settings.HISTORY_WINDOW_DAYS,
        tz=settings.tzinfo,
    )
