"""
Streak & History Engine — recent activity window and current streak.

Input is the set of calendar days on which a habit was completed, plus an
injected "now". Nothing here reads a clock, touches the database or keeps
state between calls, so every function is safe to call concurrently.

Day normalization
-----------------
Every value is reduced to a calendar `date` in the reference timezone before
it is compared: aware datetimes are converted to the timezone first, naive
datetimes are assumed to already be in it, plain dates pass through.

Streak
------
  1. No events                       → 0
  2. Most recent day older than yesterday → 0 (the chain is dead)
  3. Otherwise start at 1 and walk backwards one day at a time; the first
     missing day ends the scan.

Public API
----------
normalize_today(now, tz)                      -> date
compute_window(reference_day, window_size)    -> list[date]
build_history(events, window, tz)             -> list[DayStatus]
compute_streak(events, today, tz)             -> int
evaluate(events, now, window_size, tz)        -> HabitHistory
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 7

DayLike = Union[date, datetime]


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DayStatus:
    day: date
    completed: bool


@dataclass(frozen=True)
class HabitHistory:
    history: list[DayStatus]   # oldest → newest
    streak: int


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

def normalize_day(value: DayLike, tz: Optional[tzinfo] = None) -> date:
    """Strip the time-of-day from `value`, cutting the day in `tz` when aware."""
    # datetime is a subclass of date, so it must be checked first
    if isinstance(value, datetime):
        if value.tzinfo is not None and tz is not None:
            value = value.astimezone(tz)
        return value.date()
    return value


def normalize_today(now: datetime, tz: tzinfo = timezone.utc) -> date:
    """Calendar day of `now` in the reference timezone."""
    return normalize_day(now, tz)


# ---------------------------------------------------------------------------
# Window + history
# ---------------------------------------------------------------------------

def compute_window(reference_day: date, window_size: int = DEFAULT_WINDOW_DAYS) -> list[date]:
    """Return `window_size` days ending at `reference_day` inclusive, oldest first."""
    return [reference_day - timedelta(days=i) for i in range(window_size - 1, -1, -1)]


def build_history(
    events: Iterable[DayLike],
    window: list[date],
    tz: Optional[tzinfo] = None,
) -> list[DayStatus]:
    present = {normalize_day(e, tz) for e in events}
    return [DayStatus(day=d, completed=d in present) for d in window]


# ---------------------------------------------------------------------------
# Streak
# ---------------------------------------------------------------------------

def compute_streak(
    events: Iterable[DayLike],
    today: date,
    tz: Optional[tzinfo] = None,
) -> int:
    """
    Count consecutive completed days ending today or yesterday.

    Duplicate days are collapsed before counting; the storage layer should
    never produce them, so seeing one is logged.
    """
    normalized = [normalize_day(e, tz) for e in events]
    days = sorted(set(normalized), reverse=True)
    if not days:
        return 0
    if len(days) != len(normalized):
        logger.warning(
            "Completion log holds %d duplicate day(s); counting each day once",
            len(normalized) - len(days),
        )

    # Eligibility: nothing today or yesterday means the chain is broken.
    if (today - days[0]).days > 1:
        return 0

    # Extension: walk back while each step is exactly one day.
    streak = 1
    for previous, current in zip(days, days[1:]):
        if (previous - current).days != 1:
            break
        streak += 1
    return streak


# ---------------------------------------------------------------------------
# Public — main entry point
# ---------------------------------------------------------------------------

def evaluate(
    events: Iterable[DayLike],
    now: datetime,
    window_size: int = DEFAULT_WINDOW_DAYS,
    tz: tzinfo = timezone.utc,
) -> HabitHistory:
    """Build the recent-activity window and the current streak in one pass."""
    days = [normalize_day(e, tz) for e in events]
    today = normalize_today(now, tz)
    window = compute_window(today, window_size)
    return HabitHistory(
        history=build_history(days, window),
        streak=compute_streak(days, today),
    )
