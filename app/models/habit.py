from datetime import datetime
from sqlalchemy import Integer, String, Text, DateTime, Enum, ForeignKey, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
import enum

from app.db.base import Base


class HabitFrequency(str, enum.Enum):
    daily = "daily"
    weekly = "weekly"


class Habit(Base):
    __tablename__ = "habits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    frequency: Mapped[str] = mapped_column(
        Enum(HabitFrequency, name="habit_frequency_enum"),
        nullable=False,
        default=HabitFrequency.daily,
    )
    reminder_time: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="habits")  # noqa: F821
    tag_rows: Mapped[list["HabitTag"]] = relationship(
        back_populates="habit",
        cascade="all, delete-orphan",
        order_by="HabitTag.id",
    )
    logs: Mapped[list["HabitLog"]] = relationship(  # noqa: F821
        back_populates="habit",
        cascade="all, delete-orphan",
    )

    @property
    def tags(self) -> list[str]:
        return [t.name for t in self.tag_rows]

    @tags.setter
    def tags(self, names: list[str]) -> None:
        # First occurrence order, no duplicates; existing rows are reused
        # since (habit_id, name) is unique.
        existing = {t.name: t for t in self.tag_rows}
        self.tag_rows = [
            existing.get(name) or HabitTag(name=name)
            for name in dict.fromkeys(names)
        ]


class HabitTag(Base):
    __tablename__ = "habit_tags"
    __table_args__ = (
        UniqueConstraint("habit_id", "name", name="uq_habit_tag_habit_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    habit_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("habits.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    habit: Mapped[Habit] = relationship(back_populates="tag_rows")
