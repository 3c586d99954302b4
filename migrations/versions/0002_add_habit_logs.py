"""add habit_logs table

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19

One completion per (habit_id, day). The unique constraint is what rejects
a second tracking attempt for the same day, concurrent ones included.
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "habit_logs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "habit_id",
            sa.Integer(),
            sa.ForeignKey("habits.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_habit_logs_id", "habit_logs", ["id"])
    op.create_index("ix_habit_logs_habit_id", "habit_logs", ["habit_id"])
    op.create_index("ix_habit_logs_day", "habit_logs", ["day"])
    op.create_unique_constraint(
        "uq_habit_log_habit_day",
        "habit_logs",
        ["habit_id", "day"],
    )


def downgrade() -> None:
    op.drop_constraint("uq_habit_log_habit_day", "habit_logs", type_="unique")
    op.drop_index("ix_habit_logs_day", table_name="habit_logs")
    op.drop_index("ix_habit_logs_habit_id", table_name="habit_logs")
    op.drop_index("ix_habit_logs_id", table_name="habit_logs")
    op.drop_table("habit_logs")
