from .user import User
from .habit import Habit, HabitFrequency, HabitTag
from .habit_log import HabitLog

__all__ = [
    "User",
    "Habit",
    "HabitFrequency",
    "HabitTag",
    "HabitLog",
]
