"""
Tracking schemas.

POST /habits/{id}/track    → HabitLogResponse
GET  /habits/{id}/history  → HabitHistoryResponse
"""
from pydantic import BaseModel, Field


class HabitLogResponse(BaseModel):
    id: int
    habit_id: int
    day: str = Field(description="ISO date the completion was recorded for.")
    created_at: str


class DayStatusResponse(BaseModel):
    day: str
    completed: bool


class HabitHistoryResponse(BaseModel):
    habit_id: int
    history: list[DayStatusResponse] = Field(description="Per-day status, oldest first.")
    streak: int = Field(ge=0, description="Consecutive completed days ending today or yesterday.")
